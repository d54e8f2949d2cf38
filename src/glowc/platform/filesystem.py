"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    parent = path.parent
    return ensure_directory(parent)


__all__ = ["ensure_directory", "ensure_parent_directory"]
