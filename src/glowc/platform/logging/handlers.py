"""Where: platform/logging/handlers.py
What: Rich console handler that renders structured build events.
Why: Keep per-artifact build logs scannable without losing plain-text file logs.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class BuildEventRichHandler(RichHandler):
    """Custom Rich handler that renders build events with icons and compact paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "build.pass.start": ("🚀", "cyan"),
        "build.pass.complete": ("✅", "green"),
        "build.pass.fatal": ("❌", "red"),
        "build.pass.cancelled": ("⏹️", "yellow"),
        "build.pass.no_sources": ("ℹ️", "yellow"),
        "build.artifact.start": ("🔧", "blue"),
        "build.artifact.up_to_date": ("♻️", "green"),
        "build.artifact.built": ("🎉", "green"),
        "build.artifact.degraded": ("⚠️", "yellow"),
        "build.artifact.error": ("⛔", "red"),
        "build.cache.warning": ("🗃️", "yellow"),
    }
    _ARTIFACT_PREFIXES: ClassVar[dict[str, str]] = {
        "build.artifact.start": "Building ",
        "build.artifact.up_to_date": "Up to date ",
        "build.artifact.built": "Built ",
        "build.artifact.degraded": "Degraded ",
        "build.artifact.error": "Failed ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators, keeping only the last segments."""

        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        body_parts = [part for part in pure_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]
            display = "…" + separator + separator.join(body_parts)
        else:
            display = (anchor.rstrip("\\/") + separator if anchor else "") + separator.join(body_parts)

        text = Text()
        for char in display or ".":
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_build_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured build events with dedicated styling."""

        event = getattr(record, "build_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event.startswith("build.pass"):
            metrics: list[str] = []
            for key in ("total", "compiled", "up_to_date", "failed", "degraded"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            label = {
                "build.pass.start": "Build pass started",
                "build.pass.complete": "Build pass complete",
                "build.pass.cancelled": "Build pass cancelled",
                "build.pass.no_sources": "No effect sources found",
            }.get(event)
            if label is None:
                _ = body.append(message)
            else:
                _ = body.append(label)
                if metrics:
                    _ = body.append(" [" + ", ".join(metrics) + "]")
        elif event.startswith("build.artifact"):
            sequence = getattr(record, "sequence", None)
            total = getattr(record, "total", None)
            if isinstance(sequence, int) and sequence > 0:
                if isinstance(total, int) and total > 0:
                    _ = body.append(f"[{sequence}/{total}] ")
                else:
                    _ = body.append(f"[{sequence}] ")
            _ = body.append(self._ARTIFACT_PREFIXES.get(event, ""))
            source_path = getattr(record, "source_path", None)
            output_path = getattr(record, "output_path", None)
            if source_path:
                _ = body.append_text(self._format_path(str(source_path)))
            if event == "build.artifact.built" and output_path:
                _ = body.append(" → ")
                _ = body.append_text(self._format_path(str(output_path)))
            reason = getattr(record, "reason", None)
            if reason and event in {"build.artifact.error", "build.artifact.degraded"}:
                _ = body.append(f" ({reason})")
        else:
            _ = body.append(message)

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for build events."""

        build_text = self._render_build_message(record, message)
        if build_text is not None:
            return build_text

        return super().render_message(record, message)


__all__ = ["BuildEventRichHandler"]
