"""Utility helpers for configuration and cache file persistence."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_text_file(path: Path, content: str) -> None:
    """Persist textual content ensuring parent directories exist."""

    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")


def write_text_atomic(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` in one step.

    The content lands in a sibling temp file first, so a failed write leaves
    any previous file untouched.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            _ = handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = ["write_text_atomic", "write_text_file"]
