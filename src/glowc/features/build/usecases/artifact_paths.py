"""
Summary: Discover effect sources and derive their logical identity and output locations.
Why: Output naming and collision keys must agree between staleness checks and writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from glowc.config import BuildSettings
from glowc.config.paths import to_logical_path
from glowc.config.settings import OUTPUT_SUFFIX, SIDECAR_SUFFIX, SOURCE_EXTENSION


@dataclass(frozen=True, slots=True)
class ArtifactPaths:
    """Where one source artifact lives and where its outputs go."""

    source: Path
    logical_source: str
    output: Path
    logical_output: str
    sidecar: Path
    logical_sidecar: str

    @property
    def artifact_name(self) -> str:
        return self.source.stem

    @property
    def collision_key(self) -> str:
        """Case-insensitive key of the output path."""

        return self.logical_output.casefold()


def discover_sources(effects_root: Path) -> list[Path]:
    """Return every effect source below ``effects_root`` in a stable order."""

    if not effects_root.is_dir():
        return []
    found = {
        path.resolve()
        for path in effects_root.rglob(f"*{SOURCE_EXTENSION}")
        if path.is_file()
    }
    return sorted(found, key=lambda path: path.as_posix())


def derive_paths(source: Path, settings: BuildSettings) -> ArtifactPaths:
    """Derive the output and sidecar locations for ``source``."""

    stem = source.stem
    output = settings.generated_root / f"{stem}{OUTPUT_SUFFIX}"
    sidecar = settings.generated_root / f"{stem}{SIDECAR_SUFFIX}"
    root = settings.project_root
    return ArtifactPaths(
        source=source,
        logical_source=to_logical_path(source, root),
        output=output,
        logical_output=to_logical_path(output, root),
        sidecar=sidecar,
        logical_sidecar=to_logical_path(sidecar, root),
    )


__all__ = ["ArtifactPaths", "derive_paths", "discover_sources"]
