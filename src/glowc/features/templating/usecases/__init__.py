"""Templating use cases: validation, expansion, line mapping and diagnostics."""

from .diagnostics import Diagnostic, parse_diagnostics, remap_diagnostics
from .line_mapper import NOT_MAPPABLE, LineMapper
from .template_processor import TemplateProcessor, validate_source
from .template_source import (
    EffectTemplate,
    PlaceholderRenderer,
    TemplateError,
    TemplateRenderer,
    load_template,
)

__all__ = [
    "Diagnostic",
    "EffectTemplate",
    "LineMapper",
    "NOT_MAPPABLE",
    "PlaceholderRenderer",
    "TemplateError",
    "TemplateProcessor",
    "TemplateRenderer",
    "load_template",
    "parse_diagnostics",
    "remap_diagnostics",
    "validate_source",
]
