# shared_hooks/config_fetcher.py
from pathlib import Path
from typing import List, Set

import httpx

from shared_hooks import ui_display
from shared_hooks.app_state import AppState
from shared_hooks.data_models import FetchOutcome, FileMapping, OverwritePolicy
from shared_hooks.file_utils import resolve_target, write_file_bytes
from shared_hooks.network_utils import build_file_url, fetch_file


def _confirm_overwrite(existing: List[FileMapping], app_state: AppState) -> bool:
    """Asks once whether all existing targets may be overwritten. Defaults to no."""
    ui_display.warn(app_state, "The following files already exist:")
    for mapping in existing:
        ui_display.warn(app_state, f"  - {mapping.local_path}")
    try:
        answer = app_state.prompt_session.prompt(
            f"Overwrite {len(existing)} existing file(s)? [y/N]: ", default=""
        ).strip().lower()
    except (EOFError, KeyboardInterrupt):
        app_state.console.print()
        return False
    return answer in ("y", "yes")


def plan_skipped_targets(mappings: List[FileMapping], policy: OverwritePolicy, root: Path,
                         app_state: AppState) -> Set[str]:
    """
    Pre-flight existence check. Returns the local paths that must be left untouched.
    The prompt policy asks a single question covering every existing target.
    """
    existing = [m for m in mappings if resolve_target(root, m.local_path).exists()]
    if not existing or policy == OverwritePolicy.ALWAYS:
        return set()

    if policy == OverwritePolicy.PROMPT and _confirm_overwrite(existing, app_state):
        return set()

    if policy == OverwritePolicy.PROMPT:
        ui_display.log(app_state, "Keeping existing files, downloading only missing ones.")
    return {m.local_path for m in existing}


def fetch_config_files(mappings: List[FileMapping], app_state: AppState, client: httpx.Client,
                       base_url: str, policy: OverwritePolicy, root: Path) -> List[FetchOutcome]:
    """
    Downloads each mapping in order and writes the body verbatim to its target.
    The first DownloadError or OSError propagates and the remaining mappings are not processed.
    """
    skipped = plan_skipped_targets(mappings, policy, root, app_state)
    outcomes: List[FetchOutcome] = []

    for mapping in mappings:
        target = resolve_target(root, mapping.local_path)

        if mapping.local_path in skipped:
            ui_display.debug(app_state, f"Skipping existing file: {mapping.local_path}")
            outcomes.append(FetchOutcome(mapping=mapping, action="skipped"))
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        if target.exists():
            ui_display.warn(app_state, f"Overwriting existing file: {mapping.local_path}")

        url = build_file_url(base_url, mapping.remote_name)
        ui_display.log(app_state, f"Downloading latest {mapping.remote_name} to {mapping.local_path}")
        ui_display.debug(app_state, f"GET {url}")
        content = fetch_file(client, url)
        write_file_bytes(target, content)
        ui_display.success(app_state, f"✓ Downloaded {mapping.local_path}")
        outcomes.append(FetchOutcome(mapping=mapping, action="downloaded"))

    return outcomes
