"""
Summary: Validate simplified effect sources and expand them into full shader text.
Why: Authors write properties plus EffectMain; the boilerplate and line map are synthesized here.
"""

from __future__ import annotations

from typing import Final

from glowc.platform.logging import logger

from ..domain.grammar import classify_source
from ..domain.models import (
    ENTRY_CALL_TOKEN,
    ENTRY_SIGNATURE,
    BodyLine,
    GeneratedUnit,
    GenerationFailure,
    LineMap,
    PropertyDeclaration,
    PropertyLine,
    ValidationIssue,
    ValidationResult,
)
from .template_source import (
    BODY_PLACEHOLDER,
    DECLARATIONS_PLACEHOLDER,
    EFFECT_NAME_PLACEHOLDER,
    EffectTemplate,
    PlaceholderRenderer,
    TemplateRenderer,
)

DECLARATION_INDENT: Final[str] = " " * 8
PRIMITIVE_INDENT: Final[str] = " " * 12


def validate_source(source_text: str) -> ValidationResult:
    """Check the structural rules every effect source must satisfy."""

    if not source_text or not source_text.strip():
        return ValidationResult(ValidationIssue.EMPTY_SOURCE)

    if ENTRY_SIGNATURE not in source_text:
        return ValidationResult(ValidationIssue.MISSING_ENTRY_FUNCTION)

    depth = 0
    for char in source_text:
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                return ValidationResult(ValidationIssue.UNBALANCED_BRACES)
    if depth != 0:
        return ValidationResult(ValidationIssue.UNBALANCED_BRACES)

    return ValidationResult()


def find_entry_line(source_text: str) -> int:
    """Return the 1-based line of the first entry-function token, or 0."""

    for index, line in enumerate(source_text.splitlines(), start=1):
        if ENTRY_CALL_TOKEN in line:
            return index
    return 0


def render_declarations_block(properties: list[PropertyDeclaration]) -> str:
    """Verbatim property lines for the template's declarations section."""

    return "\n".join(f"{DECLARATION_INDENT}{prop.raw_declaration_text}" for prop in properties)


def render_primitive_lines(properties: list[PropertyDeclaration]) -> list[str]:
    """Shader variable declarations, one or two lines per property."""

    return [
        f"{PRIMITIVE_INDENT}{line}"
        for prop in properties
        for line in prop.primitive_lines()
    ]


class TemplateProcessor:
    """Expand effect sources using one loaded template."""

    template: EffectTemplate
    renderer: TemplateRenderer

    def __init__(self, template: EffectTemplate, renderer: TemplateRenderer | None = None) -> None:
        self.template = template
        self.renderer = renderer or PlaceholderRenderer()

    @staticmethod
    def validate(source_text: str) -> ValidationResult:
        return validate_source(source_text)

    def generate(self, source_text: str, artifact_name: str) -> GeneratedUnit | GenerationFailure:
        """Parse ``source_text`` and substitute it into the template.

        Unknown property kinds are tolerated (scalar fallback with a warning);
        structural problems return a ``GenerationFailure``.
        """

        if not artifact_name or not artifact_name.strip() or "\n" in artifact_name:
            return GenerationFailure(f"invalid effect name {artifact_name!r}")

        validation = validate_source(source_text)
        if not validation.ok:
            return GenerationFailure(validation.reason or "invalid source")

        properties: list[PropertyDeclaration] = []
        body_lines: list[str] = []
        for classified in classify_source(source_text):
            if isinstance(classified, PropertyLine):
                declaration = classified.declaration
                if declaration.kind is None:
                    logger.warning(
                        "Unknown property kind '%s' for %s in %s, defaulting to %s",
                        declaration.declared_kind,
                        declaration.name,
                        artifact_name,
                        declaration.mapped_primitive_type.value,
                    )
                properties.append(declaration)
            elif isinstance(classified, BodyLine):
                body_lines.append(classified.text)

        body_text = "\n".join(body_lines)
        declarations_block = render_declarations_block(properties)
        primitive_lines = render_primitive_lines(properties)
        user_block = "\n".join(part for part in ("\n".join(primitive_lines), body_text) if part)

        output_text = self.renderer.render(
            self.template,
            {
                EFFECT_NAME_PLACEHOLDER: artifact_name,
                DECLARATIONS_PLACEHOLDER: declarations_block,
                BODY_PLACEHOLDER: user_block,
            },
        )

        line_map = LineMap(
            body_start_line_in_output=self.template.body_start_line(declarations_block),
            declaration_line_count=len(primitive_lines),
            entry_function_start_line_in_source=find_entry_line(source_text),
        )
        return GeneratedUnit(
            artifact_name=artifact_name,
            properties=tuple(properties),
            body_text=body_text,
            output_text=output_text,
            line_map=line_map,
        )


__all__ = [
    "DECLARATION_INDENT",
    "PRIMITIVE_INDENT",
    "TemplateProcessor",
    "find_entry_line",
    "render_declarations_block",
    "render_primitive_lines",
    "validate_source",
]
