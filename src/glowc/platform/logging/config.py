"""Where: platform/logging/config.py
What: Build the shared ``glowc`` logger with a Rich console handler and an optional rotating file.
Why: Every layer logs through one logger; build events stay greppable in the file log.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Final, override

from rich.console import Console

from .handlers import BuildEventRichHandler


LOGGER_NAME: Final[str] = "glowc"
FILE_LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s [%(build_event)s] %(message)s"
LOG_FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 5


class _EventTagFilter(logging.Filter):
    """Give untagged records a placeholder event so the file format always applies."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "build_event"):
            record.build_event = "-"
        return True


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the package logger.

    Existing handlers are closed first, so the CLI can call this again once
    the project's log file location is known.

    Args:
        log_file: Rotating log file; console only when None.
        console_level: Threshold for the Rich console handler.
        file_level: Threshold for the file handler.

    Returns:
        logging.Logger: The configured ``glowc`` logger.
    """

    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(logging.DEBUG)
    for handler in list(configured.handlers):
        handler.close()
        configured.removeHandler(handler)

    console_handler = BuildEventRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    configured.addHandler(console_handler)

    if log_file is None:
        return configured

    target = Path(log_file).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.addFilter(_EventTagFilter())
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    configured.addHandler(file_handler)
    return configured


def log_event(
    level: int,
    event: str,
    message: str,
    *message_args: object,
    **context: Any,
) -> None:
    """Log ``message`` tagged with a structured build event.

    ``Path`` values in ``context`` are stringified so file handlers and Rich
    rendering see the same text.
    """

    extra: dict[str, Any] = {"build_event": str(event)}
    for key, value in context.items():
        extra[key] = str(value) if isinstance(value, Path) else value
    logger.log(level, message, *message_args, extra=extra, stacklevel=2)


# Console-only until the CLI attaches the configured log file.
logger: Final[logging.Logger] = setup_logger()


__all__ = ["LOGGER_NAME", "log_event", "setup_logger", "logger"]
