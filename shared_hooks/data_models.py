# shared_hooks/data_models.py
from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, field_validator


class ProjectType(str, Enum):
    ANSIBLE = "ansible"
    TERRAFORM = "terraform"
    OPENTOFU = "opentofu"


class OverwritePolicy(str, Enum):
    ALWAYS = "always"   # Overwrite every existing target, with a warning line
    PROMPT = "prompt"   # Ask once for all existing targets
    SKIP = "skip"       # Keep existing targets, fetch only missing ones


class FileMapping(BaseModel):
    remote_name: str
    local_path: str
    model_config = ConfigDict(extra='ignore', frozen=True)

    @field_validator("remote_name", "local_path")
    @classmethod
    def _relative_without_parent_refs(cls, value: str) -> str:
        if not value:
            raise ValueError("Path cannot be empty.")
        parts = PurePosixPath(value).parts
        if value.startswith("/") or ".." in parts:
            raise ValueError(f"Path must be relative and stay inside its root: {value}")
        return value


class FetchOutcome(BaseModel):
    mapping: FileMapping
    action: str  # "downloaded" or "skipped"
    model_config = ConfigDict(extra='ignore', frozen=True)
