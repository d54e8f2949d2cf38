"""Where: src/glowc/features/templating/domain/models.py
What: Value types produced by parsing and expanding a glow effect source.
Why: Keep parsing results and the diagnostic line map explicit and immutable.
Assumptions: - Property order in every generated block follows source order.
Trade-offs: - Texture kinds expand to two primitive lines, so line counts come from
  the rendered lines rather than the property count.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

ENTRY_SIGNATURE: Final[str] = "float4 EffectMain()"
ENTRY_CALL_TOKEN: Final[str] = "EffectMain()"
PROPERTY_SIGIL: Final[str] = "_"
COMMENT_PREFIX: Final[str] = "//"


class PropertyKind(StrEnum):
    """Declared property kinds recognised in effect sources (lower-cased)."""

    FLOAT = "float"
    RANGE = "range"
    COLOR = "color"
    VECTOR = "vector"
    INT = "int"
    TEXTURE_2D = "2d"
    TEXTURE_3D = "3d"
    TEXTURE_CUBE = "cube"

    @classmethod
    def from_keyword(cls, keyword: str) -> "PropertyKind | None":
        try:
            return cls(keyword.lower())
        except ValueError:
            return None


class PrimitiveType(StrEnum):
    """Shader-side variable type a property maps to."""

    SCALAR = "float"
    VECTOR4 = "float4"
    INTEGER = "int"
    TEXTURE = "texture"


_PRIMITIVES: Final[dict[PropertyKind, PrimitiveType]] = {
    PropertyKind.FLOAT: PrimitiveType.SCALAR,
    PropertyKind.RANGE: PrimitiveType.SCALAR,
    PropertyKind.COLOR: PrimitiveType.VECTOR4,
    PropertyKind.VECTOR: PrimitiveType.VECTOR4,
    PropertyKind.INT: PrimitiveType.INTEGER,
    PropertyKind.TEXTURE_2D: PrimitiveType.TEXTURE,
    PropertyKind.TEXTURE_3D: PrimitiveType.TEXTURE,
    PropertyKind.TEXTURE_CUBE: PrimitiveType.TEXTURE,
}

_TEXTURE_MACROS: Final[dict[PropertyKind, str]] = {
    PropertyKind.TEXTURE_2D: "TEXTURE2D",
    PropertyKind.TEXTURE_3D: "TEXTURE3D",
    PropertyKind.TEXTURE_CUBE: "TEXTURECUBE",
}


@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    """One property parsed from a source line."""

    name: str
    declared_kind: str
    kind: PropertyKind | None
    raw_declaration_text: str

    @property
    def mapped_primitive_type(self) -> PrimitiveType:
        """Primitive type for the declared kind; unknown kinds fall back to scalar."""

        if self.kind is None:
            return PrimitiveType.SCALAR
        return _PRIMITIVES[self.kind]

    def primitive_lines(self) -> tuple[str, ...]:
        """Variable declaration line(s), unindented."""

        if self.kind is not None and self.mapped_primitive_type is PrimitiveType.TEXTURE:
            macro = _TEXTURE_MACROS[self.kind]
            return (f"{macro}({self.name});", f"SAMPLER(sampler{self.name});")
        return (f"{self.mapped_primitive_type.value} {self.name};",)


@dataclass(frozen=True, slots=True)
class PropertyLine:
    """A source line that declares a property."""

    declaration: PropertyDeclaration


@dataclass(frozen=True, slots=True)
class BodyLine:
    """A source line that belongs to the helper functions or entry function."""

    text: str


@dataclass(frozen=True, slots=True)
class SkipLine:
    """A blank or comment-only source line."""

    text: str


ClassifiedLine = PropertyLine | BodyLine | SkipLine


@dataclass(frozen=True, slots=True)
class LineMap:
    """Translate generated-output lines back to source lines.

    Attributes:
        body_start_line_in_output: 1-based output line where the primitive
            variable block starts.
        declaration_line_count: Number of primitive variable lines injected
            before the body text.
        entry_function_start_line_in_source: 1-based source line of the entry
            function (0 when not found).
    """

    body_start_line_in_output: int
    declaration_line_count: int
    entry_function_start_line_in_source: int


@dataclass(frozen=True, slots=True)
class GeneratedUnit:
    """Result of one successful generation call."""

    artifact_name: str
    properties: tuple[PropertyDeclaration, ...]
    body_text: str
    output_text: str
    line_map: LineMap


@dataclass(frozen=True, slots=True)
class GenerationFailure:
    """Why a generation call produced no output."""

    reason: str


class ValidationIssue(StrEnum):
    """Structural problems that stop an effect source from being generated."""

    EMPTY_SOURCE = "empty source"
    MISSING_ENTRY_FUNCTION = "missing entry function"
    UNBALANCED_BRACES = "unbalanced braces"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating an effect source."""

    issue: ValidationIssue | None = None

    @property
    def ok(self) -> bool:
        return self.issue is None

    @property
    def reason(self) -> str | None:
        return self.issue.value if self.issue is not None else None


__all__ = [
    "BodyLine",
    "ClassifiedLine",
    "COMMENT_PREFIX",
    "ENTRY_CALL_TOKEN",
    "ENTRY_SIGNATURE",
    "GeneratedUnit",
    "GenerationFailure",
    "LineMap",
    "PROPERTY_SIGIL",
    "PrimitiveType",
    "PropertyDeclaration",
    "PropertyKind",
    "PropertyLine",
    "SkipLine",
    "ValidationIssue",
    "ValidationResult",
]
