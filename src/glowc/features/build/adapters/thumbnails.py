"""Where: src/glowc/features/build/adapters/thumbnails.py
What: Preview renderers producing the PNG sidecar for a compiled program.
Why: Rendering lives outside the compiler; these adapters cover a command-line renderer and a fallback.
Assumptions: - Renderers signal failure by returning None, never by leaving partial files behind.
Trade-offs: - The placeholder preview reuses the scan texture instead of rendering the effect.
"""

from __future__ import annotations

import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from glowc.features.build.usecases.ports import CompiledProgram, ThumbnailRendererPort
from glowc.platform.logging import logger


class PlaceholderThumbnailRenderer(ThumbnailRendererPort):
    """Use the scan texture itself as the preview image."""

    def render(
        self,
        program: CompiledProgram,
        scan_texture: Path | None,
        depth_texture: Path | None,
        width: int,
    ) -> bytes | None:
        if scan_texture is None or not scan_texture.is_file():
            return None
        try:
            return scan_texture.read_bytes() or None
        except OSError as exc:
            logger.debug("Cannot read scan texture %s: %s", scan_texture, exc)
            return None


class CommandThumbnailRenderer(ThumbnailRendererPort):
    """Invoke an external renderer that writes a PNG.

    Supported argument placeholders: ``{program}``, ``{scan}``, ``{depth}``,
    ``{width}`` and ``{output}``.
    """

    def __init__(self, command: Sequence[str]) -> None:
        if not command:
            raise ValueError("thumbnail command must not be empty")
        self.command = tuple(command)

    def build_command(
        self,
        program: CompiledProgram,
        scan_texture: Path | None,
        depth_texture: Path | None,
        width: int,
        output: Path,
    ) -> list[str]:
        values = {
            "{program}": str(program.location),
            "{scan}": str(scan_texture) if scan_texture is not None else "",
            "{depth}": str(depth_texture) if depth_texture is not None else "",
            "{width}": str(width),
            "{output}": str(output),
        }
        cmd: list[str] = []
        for part in self.command:
            for token, value in values.items():
                part = part.replace(token, value)
            cmd.append(part)
        return cmd

    def render(
        self,
        program: CompiledProgram,
        scan_texture: Path | None,
        depth_texture: Path | None,
        width: int,
    ) -> bytes | None:
        with tempfile.TemporaryDirectory(prefix="glowc-thumb-") as tmp:
            output = Path(tmp) / "thumbnail.png"
            cmd = self.build_command(program, scan_texture, depth_texture, width, output)
            try:
                proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
            except OSError as exc:
                logger.warning("Cannot run thumbnail renderer %s: %s", cmd[0], exc)
                return None
            if proc.returncode != 0:
                logger.warning(
                    "Thumbnail renderer failed for %s (status %d): %s",
                    program.output_path,
                    proc.returncode,
                    proc.stderr.strip(),
                )
                return None
            if not output.is_file():
                return None
            return output.read_bytes() or None


__all__ = ["CommandThumbnailRenderer", "PlaceholderThumbnailRenderer"]
