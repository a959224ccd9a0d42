# shared_hooks/startup_checks.py
from pathlib import Path

from shared_hooks import ui_display
from shared_hooks.app_state import AppState


def perform_git_root_check(app_state: AppState, root: Path) -> bool:
    """
    Warns when the working directory is not the top of a git checkout.
    pre-commit reads .pre-commit-config.yaml from the repository root, so files
    written anywhere else are silently ignored by it. Never aborts the run.
    """
    git_marker = Path(root) / ".git"
    if git_marker.exists():  # directory, or file for worktrees/submodules
        return True

    in_subdirectory = any((parent / ".git").exists() for parent in Path(root).resolve().parents)
    if in_subdirectory:
        ui_display.warn(app_state, "This directory is inside a git repository but is not its root; "
                                   "pre-commit will not pick up files written here.")
    else:
        ui_display.warn(app_state, "This directory is not a git repository; run 'git init' before 'pre-commit install'.")
    return False
