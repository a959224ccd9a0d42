import shutil
from pathlib import Path
from typing import List, Optional

import yaml
from rich.panel import Panel
from rich.text import Text

from shared_hooks.app_state import AppState
from shared_hooks.data_models import FetchOutcome, OverwritePolicy, ProjectType

STATUS_PREFIX = "[setup-configs]"


def _status_line(message: str, style: str) -> Text:
    # Text.assemble keeps the bracketed prefix and file names out of Rich's markup parser
    return Text.assemble((STATUS_PREFIX, style), " ", message)


def log(app_state: AppState, message: str):
    app_state.console.print(_status_line(message, "blue"))


def success(app_state: AppState, message: str):
    app_state.console.print(_status_line(message, "green"))


def warn(app_state: AppState, message: str):
    app_state.console.print(_status_line(message, "yellow"))


def error(app_state: AppState, message: str):
    app_state.err_console.print(_status_line(message, "red"))


def debug(app_state: AppState, message: str):
    if app_state.DEBUG:
        app_state.console.print(Text(f"DEBUG: {message}", style="dim"))


def display_setup_banner(app_state: AppState, project_type: Optional[ProjectType], base_url: str,
                         policy: OverwritePolicy, configs_only: bool, root: Path):
    """Displays which configuration set is about to be installed and from where."""
    project_label = project_type.value if project_type else "ansible (default)"
    mode_label = ".config/ files only" if configs_only else "full setup"

    body = Text.assemble(
        ("Directory: ", "bold bright_blue"), (str(root), "bold green"), "\n",
        ("Project type: ", "bold bright_blue"), (project_label, "bold magenta"), (f" ({mode_label})", "dim"), "\n",
        ("Source: ", "bold bright_blue"), (base_url, "dim"), "\n",
        ("Existing files: ", "bold bright_blue"), (policy.value, "dim"),
    )
    app_state.console.print(Panel(
        body,
        border_style="blue",
        title="[bold blue]Shared pre-commit configuration setup[/bold blue]",
        title_align="left",
        expand=False,
    ))


def describe_pre_commit_config(path: Path) -> Optional[str]:
    """
    Returns a short description of a .pre-commit-config.yaml ("3 hook repos, 11 hooks"),
    or None if the file is missing or is not a mapping with a 'repos' list.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return None
    if not isinstance(data, dict) or not isinstance(data.get("repos"), list):
        return None
    repos = data["repos"]
    hook_count = sum(len(r.get("hooks") or []) for r in repos if isinstance(r, dict))
    return f"{len(repos)} hook repos, {hook_count} hooks"


def display_summary(app_state: AppState, outcomes: List[FetchOutcome], root: Path):
    success(app_state, "🎉 Configuration setup complete!")
    log(app_state, "Config files installed in:")
    for outcome in outcomes:
        local_path = outcome.mapping.local_path
        if not (root / local_path).is_file():
            continue
        note = "" if outcome.action == "downloaded" else " (kept existing)"
        if local_path.endswith(".pre-commit-config.yaml"):
            description = describe_pre_commit_config(root / local_path)
            if description:
                note += f" ({description})"
        log(app_state, f"  - {local_path}{note}")


def display_next_steps(app_state: AppState, wrote_config_dir: bool):
    log(app_state, "")
    log(app_state, "Next steps:")
    steps = []
    if wrote_config_dir:
        steps.append("Review the configuration files in .config/ directory")
        steps.append("Customize them for your project if needed")
    steps.append("Run 'pre-commit install' to enable the hooks in this repository")
    steps.append("Run 'pre-commit run --all-files' to test the setup")
    for number, step in enumerate(steps, start=1):
        log(app_state, f"{number}. {step}")

    if shutil.which("pre-commit") is None:
        warn(app_state, "pre-commit was not found on PATH. Install it first, e.g. 'pipx install pre-commit'.")
