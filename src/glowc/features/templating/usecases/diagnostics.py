"""Where: src/glowc/features/templating/usecases/diagnostics.py
What: Extract line-numbered messages from compiler output and remap them to source lines.
Why: Importer diagnostics refer to the generated shader, not the file the author edited.
Assumptions: - Compilers report lines as `file:LINE:COL: msg`, `file(LINE,COL): msg` or `... at line LINE`.
Trade-offs: - Lines matching no known form are kept with line 0 so no message is lost.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .line_mapper import NOT_MAPPABLE, LineMapper

_DIAGNOSTIC_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^.*?:(?P<line>\d+):(?:\d+:)?\s*(?P<message>.+)$"),
    re.compile(r"^.*?\((?P<line>\d+)(?:,\s*\d+)?\)\s*:\s*(?P<message>.+)$"),
    re.compile(r"^(?P<message>.+?)\s+at line (?P<line>\d+)\b.*$", re.IGNORECASE),
)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One compiler message with the line it refers to (0 when unknown)."""

    line: int
    message: str

    def format(self, source_path: str) -> str:
        if self.line == NOT_MAPPABLE:
            return f"{source_path}: {self.message}"
        return f"{source_path}:{self.line}: {self.message}"


def parse_diagnostic_line(text: str) -> Diagnostic | None:
    stripped = text.strip()
    if not stripped:
        return None
    for pattern in _DIAGNOSTIC_PATTERNS:
        match = pattern.match(stripped)
        if match is not None:
            return Diagnostic(line=int(match.group("line")), message=match.group("message").strip())
    return Diagnostic(line=NOT_MAPPABLE, message=stripped)


def parse_diagnostics(text: str) -> list[Diagnostic]:
    """Split compiler output into diagnostics, one per non-blank line."""

    diagnostics: list[Diagnostic] = []
    for raw_line in text.splitlines():
        diagnostic = parse_diagnostic_line(raw_line)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics


def remap_diagnostics(diagnostics: Iterable[Diagnostic], mapper: LineMapper) -> list[Diagnostic]:
    """Translate each diagnostic's output line through ``mapper``."""

    remapped: list[Diagnostic] = []
    for diagnostic in diagnostics:
        if diagnostic.line == NOT_MAPPABLE:
            remapped.append(diagnostic)
            continue
        remapped.append(Diagnostic(line=mapper.translate(diagnostic.line), message=diagnostic.message))
    return remapped


__all__ = ["Diagnostic", "parse_diagnostic_line", "parse_diagnostics", "remap_diagnostics"]
