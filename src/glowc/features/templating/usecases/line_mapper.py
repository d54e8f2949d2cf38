"""
Summary: Translate generated-output line numbers back to effect source lines.
Why: Compiler diagnostics point into the expanded shader; authors need their own line numbers.
"""

from __future__ import annotations

from typing import Final

from glowc.platform.logging import logger

from ..domain.models import LineMap

NOT_MAPPABLE: Final[int] = 0
DECLARATION_ANCHOR_LINE: Final[int] = 1


class LineMapper:
    """Line translation bound to the line map of one generation call."""

    def __init__(self, line_map: LineMap | None) -> None:
        self.line_map = line_map

    def translate(self, output_line: int) -> int:
        """Map ``output_line`` to a source line.

        Returns ``NOT_MAPPABLE`` for lines in template boilerplate and line 1
        for lines inside the synthesized variable block. Without a line map the
        input is returned unchanged.
        """

        line_map = self.line_map
        if line_map is None:
            logger.warning("No line map available, reporting output line %d unchanged", output_line)
            return output_line

        if output_line < line_map.body_start_line_in_output:
            return NOT_MAPPABLE

        offset = output_line - line_map.body_start_line_in_output - line_map.declaration_line_count
        if offset < 0:
            return DECLARATION_ANCHOR_LINE
        return line_map.entry_function_start_line_in_source + offset


__all__ = ["DECLARATION_ANCHOR_LINE", "LineMapper", "NOT_MAPPABLE"]
