# shared_hooks/file_utils.py
from pathlib import Path


def resolve_target(root: Path, local_path: str) -> Path:
    """Return the absolute target path for 'local_path', refusing anything outside 'root'."""
    if not local_path:
        raise ValueError("Path cannot be empty.")
    candidate = Path(local_path)
    if candidate.is_absolute() or ".." in candidate.parts:
        raise ValueError(f"Invalid path: {local_path} must be relative and must not contain parent directory references")
    return Path(root).resolve() / candidate


def write_file_bytes(path: Path, content: bytes) -> None:
    """Create (or overwrite) a file at 'path' with 'content', creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
    except OSError as e:
        raise OSError(f"Failed to write file '{path}': {e}") from e
