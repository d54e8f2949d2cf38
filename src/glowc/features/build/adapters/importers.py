"""Summary: Adapters making generated shader text loadable through the host compile step.
Why: The build pass only needs "loadable or not, plus diagnostics"; how is a deployment choice."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from glowc.features.build.usecases.ports import CompiledProgram, ImportOutcome, ProgramImporterPort
from glowc.platform.logging import logger

OUTPUT_PLACEHOLDER: Final[str] = "{output}"


class FileImporter(ProgramImporterPort):
    """Treat a non-empty written shader as a loadable program."""

    def import_program(self, output_path: Path, text: str) -> ImportOutcome:
        if not output_path.is_file() or output_path.stat().st_size == 0:
            return ImportOutcome(None, f"{output_path}: generated output is missing or empty")
        return ImportOutcome(CompiledProgram(output_path=output_path))


class CommandImporter(ProgramImporterPort):
    """Run an external compiler over the written shader.

    ``{output}`` in any argument is replaced by the shader path; when no
    argument carries the placeholder the path is appended. A non-zero exit
    status means the program is not loadable and stderr becomes diagnostics.
    """

    def __init__(self, command: Sequence[str], *, program_suffix: str | None = None) -> None:
        if not command:
            raise ValueError("compile command must not be empty")
        self.command = tuple(command)
        self.program_suffix = program_suffix

    def build_command(self, output_path: Path) -> list[str]:
        if any(OUTPUT_PLACEHOLDER in part for part in self.command):
            return [part.replace(OUTPUT_PLACEHOLDER, str(output_path)) for part in self.command]
        return [*self.command, str(output_path)]

    def import_program(self, output_path: Path, text: str) -> ImportOutcome:
        cmd = self.build_command(output_path)
        logger.debug("Running compile command: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            return ImportOutcome(None, f"cannot run {cmd[0]}: {exc}")

        if proc.returncode != 0:
            diagnostics = proc.stderr.strip() or proc.stdout.strip()
            return ImportOutcome(None, diagnostics or f"{cmd[0]} exited with status {proc.returncode}")

        program_path = output_path.with_suffix(self.program_suffix) if self.program_suffix else None
        if program_path is not None and not program_path.is_file():
            return ImportOutcome(None, f"{program_path}: compiled program was not produced")
        return ImportOutcome(CompiledProgram(output_path=output_path, program_path=program_path))


__all__ = ["CommandImporter", "FileImporter", "OUTPUT_PLACEHOLDER"]
