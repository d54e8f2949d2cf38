"""
Summary: Line grammar splitting an effect source into properties, body and skipped lines.
Why: Property detection must be anchored at line start so texture sampling calls stay body code.
"""

from __future__ import annotations

import re
from typing import Final

from .models import (
    COMMENT_PREFIX,
    BodyLine,
    ClassifiedLine,
    PropertyDeclaration,
    PropertyKind,
    PropertyLine,
    SkipLine,
)

# _Name ("Display Label", Kind[(args)]) = default
#
#   _Intensity ("Intensity", Range(0,5)) = 1
#   _Color ("Color", Color) = (1,0.6,0.2,1)
#   _Speed ("Speed", Float) = 2.5
#
# The leading anchor keeps lines such as
#   float4 c = SAMPLE_TEXTURE2D(_ScanTex, sampler_ScanTex, uv);
# out of the property list even though they contain `_Name (`.
PROPERTY_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?P<name>_\w+)\s*\(.*?,\s*(?P<kind>\w+)(?:\(.*?\))?\)\s*="
)


def parse_property(line: str) -> PropertyDeclaration | None:
    """Parse ``line`` as a property declaration, or return None."""

    match = PROPERTY_PATTERN.match(line)
    if match is None:
        return None

    declared_kind = match.group("kind")
    return PropertyDeclaration(
        name=match.group("name"),
        declared_kind=declared_kind,
        kind=PropertyKind.from_keyword(declared_kind),
        raw_declaration_text=line.strip(),
    )


def classify_line(line: str) -> ClassifiedLine:
    """Classify one source line."""

    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_PREFIX):
        return SkipLine(line)

    declaration = parse_property(line)
    if declaration is not None:
        return PropertyLine(declaration)
    return BodyLine(line)


def classify_source(source_text: str) -> list[ClassifiedLine]:
    """Classify every line of ``source_text`` in order."""

    return [classify_line(line) for line in source_text.splitlines()]


__all__ = ["PROPERTY_PATTERN", "classify_line", "classify_source", "parse_property"]
