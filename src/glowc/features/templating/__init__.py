# Where: glowc.features.templating
# What: Expose effect-source parsing, template expansion and line mapping.
# Why: The build orchestrator and CLI depend on this surface only.

from .domain import (
    GeneratedUnit,
    GenerationFailure,
    LineMap,
    PropertyDeclaration,
    PropertyKind,
    ValidationIssue,
    ValidationResult,
)
from .usecases import (
    NOT_MAPPABLE,
    Diagnostic,
    EffectTemplate,
    LineMapper,
    PlaceholderRenderer,
    TemplateError,
    TemplateProcessor,
    TemplateRenderer,
    load_template,
    parse_diagnostics,
    remap_diagnostics,
    validate_source,
)

__all__ = [
    "Diagnostic",
    "EffectTemplate",
    "GeneratedUnit",
    "GenerationFailure",
    "LineMap",
    "LineMapper",
    "NOT_MAPPABLE",
    "PlaceholderRenderer",
    "PropertyDeclaration",
    "PropertyKind",
    "TemplateError",
    "TemplateProcessor",
    "TemplateRenderer",
    "ValidationIssue",
    "ValidationResult",
    "load_template",
    "parse_diagnostics",
    "remap_diagnostics",
    "validate_source",
]
