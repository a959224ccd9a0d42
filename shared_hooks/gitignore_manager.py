# shared_hooks/gitignore_manager.py
from pathlib import Path

from shared_hooks import ui_display
from shared_hooks.app_state import AppState

GITIGNORE_FILE = ".gitignore"
CONFIG_DIR_ENTRY = ".config/"
ENTRY_COMMENT = "# Shared configuration files (managed by pre-commit)"

# .gitignore may hold any bytes, so it is matched and appended in binary mode
_ENTRY_BYTES = CONFIG_DIR_ENTRY.encode("ascii")


def has_config_dir_entry(content: bytes) -> bool:
    """True if some line is exactly '.config/'. Only a CRLF line ending is tolerated."""
    return any(line.rstrip(b"\r") == _ENTRY_BYTES for line in content.split(b"\n"))


def update_gitignore(app_state: AppState, root: Path) -> bool:
    """
    Appends the .config/ entry to an existing .gitignore.
    A missing .gitignore is never created. Returns True if the file was changed.
    """
    gitignore_path = Path(root) / GITIGNORE_FILE
    if not gitignore_path.is_file():
        ui_display.debug(app_state, f"No {GITIGNORE_FILE} found, not adding {CONFIG_DIR_ENTRY}")
        return False

    with open(gitignore_path, "rb") as f:
        content = f.read()
    if has_config_dir_entry(content):
        ui_display.debug(app_state, f"{GITIGNORE_FILE} already ignores {CONFIG_DIR_ENTRY}")
        return False

    ui_display.log(app_state, f"Adding {CONFIG_DIR_ENTRY} to {GITIGNORE_FILE}")
    addition = b""
    if content and not content.endswith(b"\n"):
        addition += b"\n"  # finish the last line first
    addition += f"\n{ENTRY_COMMENT}\n{CONFIG_DIR_ENTRY}\n".encode("ascii")
    with open(gitignore_path, "ab") as f:
        f.write(addition)
    ui_display.success(app_state, f"✓ Added {CONFIG_DIR_ENTRY} to {GITIGNORE_FILE}")
    return True
