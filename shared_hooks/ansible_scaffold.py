# shared_hooks/ansible_scaffold.py
from pathlib import Path
from textwrap import dedent

from shared_hooks import ui_display
from shared_hooks.app_state import AppState
from shared_hooks.file_mappings import CONFIG_DIR

ANSIBLE_CFG_FILE = "ansible.cfg"

ANSIBLE_CFG_TEMPLATE = dedent(f"""\
    # Generated by setup-configs. Edit freely, it will not be overwritten.
    [defaults]
    inventory = ./inventory
    roles_path = ./roles
    collections_path = ./collections
    host_key_checking = False
    retry_files_enabled = False
    interpreter_python = auto_silent

    # Linting is driven by pre-commit with the shared settings:
    #   ansible-lint -c {CONFIG_DIR}/ansible-lint.yml
    #   yamllint -c {CONFIG_DIR}/yamllint.yml .
    # ANSIBLE_LINT_CONFIG={CONFIG_DIR}/ansible-lint.yml

    [ssh_connection]
    pipelining = True
""")


def scaffold_ansible_cfg(app_state: AppState, root: Path) -> bool:
    """Writes ansible.cfg from the template unless one already exists. Returns True if written."""
    cfg_path = Path(root) / ANSIBLE_CFG_FILE
    if cfg_path.exists():
        ui_display.log(app_state, f"{ANSIBLE_CFG_FILE} already exists, leaving it untouched")
        return False

    try:
        with open(cfg_path, "x", encoding="utf-8") as f:
            f.write(ANSIBLE_CFG_TEMPLATE)
    except OSError as e:
        raise OSError(f"Failed to write file '{cfg_path}': {e}") from e
    ui_display.success(app_state, f"✓ Created {ANSIBLE_CFG_FILE}")
    return True
