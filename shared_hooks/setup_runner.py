# shared_hooks/setup_runner.py
from pathlib import Path
from typing import Optional

import httpx

from shared_hooks import network_utils, ui_display
from shared_hooks.ansible_scaffold import scaffold_ansible_cfg
from shared_hooks.app_state import AppState
from shared_hooks.config_fetcher import fetch_config_files
from shared_hooks.config_utils import get_config_value
from shared_hooks.data_models import OverwritePolicy, ProjectType
from shared_hooks.file_mappings import get_file_mappings, writes_config_dir
from shared_hooks.gitignore_manager import update_gitignore
from shared_hooks.network_utils import DownloadError
from shared_hooks.startup_checks import perform_git_root_check


def run_setup(app_state: AppState, project_type: Optional[ProjectType], configs_only: bool = False,
              root: Optional[Path] = None, client: Optional[httpx.Client] = None) -> int:
    """
    Runs one setup pass and returns the process exit code.
    Steps run strictly in order and the first failure ends the run:
    fetch files -> .gitignore entry -> ansible.cfg scaffold -> summary.
    """
    root = Path(root) if root is not None else Path.cwd()
    base_url = get_config_value("base_url", app_state.RUNTIME_OVERRIDES, app_state.console)
    policy = OverwritePolicy(get_config_value("overwrite", app_state.RUNTIME_OVERRIDES, app_state.console))

    # Without a project type only the --configs-only variant reaches this point,
    # and it always means the Ansible .config/ set.
    effective_type = project_type or ProjectType.ANSIBLE
    mappings = get_file_mappings(effective_type, include_pre_commit_config=not configs_only)

    perform_git_root_check(app_state, root)
    ui_display.display_setup_banner(app_state, project_type, base_url, policy, configs_only, root)

    if not mappings:
        ui_display.warn(app_state, f"No .config/ files are shared for '{effective_type.value}' projects; nothing to do.")
        return 0

    owns_client = client is None
    if owns_client:
        client = network_utils.create_http_client()

    ui_display.log(app_state, f"Setting up shared configuration files (existing files: {policy.value})...")
    try:
        outcomes = fetch_config_files(mappings, app_state, client, base_url, policy, root)
    except DownloadError as e:
        ui_display.error(app_state, f"✗ Failed to download {e.url} ({e.reason})")
        return 1
    except (OSError, ValueError) as e:
        ui_display.error(app_state, f"✗ {e}")
        return 1
    finally:
        if owns_client:
            client.close()

    wrote_config_dir = writes_config_dir(mappings)
    try:
        if wrote_config_dir:
            update_gitignore(app_state, root)
        if effective_type == ProjectType.ANSIBLE and not configs_only:
            scaffold_ansible_cfg(app_state, root)
    except (OSError, ValueError) as e:
        ui_display.error(app_state, f"✗ {e}")
        return 1

    ui_display.display_summary(app_state, outcomes, root)
    ui_display.display_next_steps(app_state, wrote_config_dir)
    return 0
