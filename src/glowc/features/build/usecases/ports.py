"""Summary: Ports defining the build orchestrator's external collaborators.
Why: Decouple the pass from host compilers, preview renderers and disk so tests and swaps stay simple."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class CompiledProgram:
    """Handle to a program the host compile step made loadable."""

    output_path: Path
    program_path: Path | None = None

    @property
    def location(self) -> Path:
        """Path handed to renderers; the compiled binary when one exists."""

        return self.program_path or self.output_path


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """Result of asking the host to import generated shader text."""

    program: CompiledProgram | None
    diagnostics: str = ""

    @property
    def ok(self) -> bool:
        return self.program is not None


@runtime_checkable
class ProgramImporterPort(Protocol):
    """Port for the host import/compile step."""

    def import_program(self, output_path: Path, text: str) -> ImportOutcome:
        """Make the program written at ``output_path`` loadable, or report why not."""
        ...


@runtime_checkable
class ThumbnailRendererPort(Protocol):
    """Port for the preview renderer producing sidecar bitmaps."""

    def render(
        self,
        program: CompiledProgram,
        scan_texture: Path | None,
        depth_texture: Path | None,
        width: int,
    ) -> bytes | None:
        """Return encoded PNG bytes, or None when no preview could be produced."""
        ...


@runtime_checkable
class FilesystemPort(Protocol):
    """Port abstracting the file writes a build pass performs."""

    def write_text(self, path: Path, content: str) -> None:
        """Write ``content`` to ``path``, creating parent directories."""
        ...

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write ``content`` to ``path``, creating parent directories."""
        ...

    def exists(self, path: Path) -> bool:
        """Return True when ``path`` exists as a file."""
        ...

    def remove(self, path: Path) -> None:
        """Delete ``path`` if present."""
        ...


__all__ = [
    "CompiledProgram",
    "FilesystemPort",
    "ImportOutcome",
    "ProgramImporterPort",
    "ThumbnailRendererPort",
]
