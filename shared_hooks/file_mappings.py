# shared_hooks/file_mappings.py
# Static definition of what gets downloaded for each project type.
# remote_name is relative to the configured base URL, local_path to the working directory.
from typing import Dict, List

from shared_hooks.data_models import FileMapping, ProjectType

CONFIG_DIR = ".config"
PRE_COMMIT_CONFIG_FILE = ".pre-commit-config.yaml"

ANSIBLE_CONFIG_FILES: List[FileMapping] = [
    FileMapping(remote_name="configs/ansible-lint.yml", local_path=f"{CONFIG_DIR}/ansible-lint.yml"),
    FileMapping(remote_name="configs/yamllint.yml", local_path=f"{CONFIG_DIR}/yamllint.yml"),
    FileMapping(remote_name="configs/flake8.conf", local_path=f"{CONFIG_DIR}/flake8.conf"),
    FileMapping(remote_name="configs/pyproject.toml", local_path=f"{CONFIG_DIR}/pyproject.toml"),
]

CONFIG_FILES_BY_PROJECT_TYPE: Dict[ProjectType, List[FileMapping]] = {
    ProjectType.ANSIBLE: ANSIBLE_CONFIG_FILES,
    ProjectType.TERRAFORM: [],
    ProjectType.OPENTOFU: [],
}

PRE_COMMIT_TEMPLATES: Dict[ProjectType, str] = {
    ProjectType.ANSIBLE: f"templates/ansible/{PRE_COMMIT_CONFIG_FILE}",
    ProjectType.TERRAFORM: f"templates/terraform/{PRE_COMMIT_CONFIG_FILE}",
    ProjectType.OPENTOFU: f"templates/opentofu/{PRE_COMMIT_CONFIG_FILE}",
}


def get_pre_commit_mapping(project_type: ProjectType) -> FileMapping:
    return FileMapping(remote_name=PRE_COMMIT_TEMPLATES[project_type], local_path=PRE_COMMIT_CONFIG_FILE)


def get_file_mappings(project_type: ProjectType, include_pre_commit_config: bool = True) -> List[FileMapping]:
    """
    Returns the ordered mappings to fetch for a project type.
    The .config/ files come first, the top-level .pre-commit-config.yaml last.
    """
    mappings = list(CONFIG_FILES_BY_PROJECT_TYPE[project_type])
    if include_pre_commit_config:
        mappings.append(get_pre_commit_mapping(project_type))
    return mappings


def writes_config_dir(mappings: List[FileMapping]) -> bool:
    """True if any mapping lands under the shared .config/ directory."""
    return any(m.local_path.startswith(f"{CONFIG_DIR}/") for m in mappings)
