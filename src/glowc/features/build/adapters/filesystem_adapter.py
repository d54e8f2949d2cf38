"""src/glowc/features/build/adapters/filesystem_adapter.py
What: Adapter implementing FilesystemPort on top of platform helpers.
Why: Keep disk writes in adapters while the build use cases target abstractions."""

from __future__ import annotations

from pathlib import Path

from glowc.features.build.usecases.ports import FilesystemPort
from glowc.platform.filesystem import ensure_parent_directory


class LocalFilesystemAdapter(FilesystemPort):
    """Adapter writing generated files to the local disk."""

    def write_text(self, path: Path, content: str) -> None:
        _ = ensure_parent_directory(path)
        # LF endings keep generated output byte-identical across platforms.
        with open(path, "w", encoding="utf-8", newline="\n") as handle:
            _ = handle.write(content)

    def write_bytes(self, path: Path, content: bytes) -> None:
        _ = ensure_parent_directory(path)
        _ = path.write_bytes(content)

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def remove(self, path: Path) -> None:
        path.unlink(missing_ok=True)


__all__ = ["LocalFilesystemAdapter"]
