"""Where: src/glowc/features/templating/usecases/template_source.py
What: Load the effect template and substitute its placeholder tokens.
Why: Keep text substitution behind a narrow renderer seam so it can be swapped later.
Assumptions: - Placeholder tokens never contain newlines.
Trade-offs: - Literal replacement gives byte-exact output at the cost of expressiveness.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

EFFECT_NAME_PLACEHOLDER: Final[str] = "<EFFECT_NAME_PLACEHOLDER>"
DECLARATIONS_PLACEHOLDER: Final[str] = "<DERIVED_USER_PROPERTIES_PLACEHOLDER>"
BODY_PLACEHOLDER: Final[str] = "<USER_CODE_PLACEHOLDER>"


class TemplateError(Exception):
    """Raised when the effect template is missing, unreadable or malformed."""


@dataclass(frozen=True, slots=True)
class EffectTemplate:
    """Template text plus the structural facts the line map depends on.

    Attributes:
        text: Raw template text.
        body_placeholder_line: 1-based template line holding the body token.
        declarations_before_body: Whether the declarations token precedes the
            body token, so multi-line declaration blocks shift the body down.
    """

    text: str
    body_placeholder_line: int
    declarations_before_body: bool

    @classmethod
    def from_text(cls, text: str) -> "EffectTemplate":
        """Build a template from raw text, checking its placeholder structure."""

        for token in (DECLARATIONS_PLACEHOLDER, BODY_PLACEHOLDER):
            count = text.count(token)
            if count != 1:
                raise TemplateError(f"Template must contain {token} exactly once (found {count})")
        if EFFECT_NAME_PLACEHOLDER not in text:
            raise TemplateError(f"Template must contain {EFFECT_NAME_PLACEHOLDER}")

        body_index = text.index(BODY_PLACEHOLDER)
        declarations_index = text.index(DECLARATIONS_PLACEHOLDER)
        if text.count("\n", min(body_index, declarations_index), max(body_index, declarations_index)) == 0:
            raise TemplateError("Declarations and body placeholders must sit on separate lines")

        return cls(
            text=text,
            body_placeholder_line=text.count("\n", 0, body_index) + 1,
            declarations_before_body=declarations_index < body_index,
        )

    def body_start_line(self, declarations_block: str) -> int:
        """Output line where the body block begins once ``declarations_block`` is in place."""

        if not self.declarations_before_body:
            return self.body_placeholder_line
        return self.body_placeholder_line + declarations_block.count("\n")


def load_template(path: Path) -> EffectTemplate:
    """Read and check the template at ``path``.

    Raises:
        TemplateError: If the file is missing, unreadable or malformed.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TemplateError(f"Template not found at {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"Failed to load template {path}: {exc}") from exc
    return EffectTemplate.from_text(text)


@runtime_checkable
class TemplateRenderer(Protocol):
    """Port for turning a template plus named blocks into output text."""

    def render(self, template: EffectTemplate, blocks: Mapping[str, str]) -> str:
        """Return ``template`` with every placeholder in ``blocks`` substituted."""
        ...


class PlaceholderRenderer:
    """Literal token replacement in a single pass over the template text.

    Replacement text is never rescanned, so user code or property labels that
    happen to contain a placeholder token are emitted verbatim.
    """

    def render(self, template: EffectTemplate, blocks: Mapping[str, str]) -> str:
        if not blocks:
            return template.text
        # Longest first so a token that prefixes another cannot shadow it.
        tokens = sorted(blocks, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(token) for token in tokens))
        return pattern.sub(lambda match: blocks[match.group(0)], template.text)


__all__ = [
    "BODY_PLACEHOLDER",
    "DECLARATIONS_PLACEHOLDER",
    "EFFECT_NAME_PLACEHOLDER",
    "EffectTemplate",
    "PlaceholderRenderer",
    "TemplateError",
    "TemplateRenderer",
    "load_template",
]
