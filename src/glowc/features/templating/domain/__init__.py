"""Summary: Effect-source value types and the line grammar.
Why: Parsing results are plain data so generation and mapping stay testable."""

from .grammar import PROPERTY_PATTERN, classify_line, classify_source, parse_property
from .models import (
    BodyLine,
    ClassifiedLine,
    GeneratedUnit,
    GenerationFailure,
    LineMap,
    PrimitiveType,
    PropertyDeclaration,
    PropertyKind,
    PropertyLine,
    SkipLine,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "BodyLine",
    "ClassifiedLine",
    "GeneratedUnit",
    "GenerationFailure",
    "LineMap",
    "PROPERTY_PATTERN",
    "PrimitiveType",
    "PropertyDeclaration",
    "PropertyKind",
    "PropertyLine",
    "SkipLine",
    "ValidationIssue",
    "ValidationResult",
    "classify_line",
    "classify_source",
    "parse_property",
]
