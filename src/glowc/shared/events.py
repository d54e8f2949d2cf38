"""Summary: Structured event identifiers attached to build log records.
Why: Every layer tags its logs the same way so the Rich handler can style them."""

from __future__ import annotations

from enum import StrEnum


class BuildEvent(StrEnum):
    """Structured event identifiers for build pass logs."""

    PASS_START = "build.pass.start"
    PASS_COMPLETE = "build.pass.complete"
    PASS_FATAL = "build.pass.fatal"
    PASS_CANCELLED = "build.pass.cancelled"
    PASS_NO_SOURCES = "build.pass.no_sources"
    ARTIFACT_START = "build.artifact.start"
    ARTIFACT_UP_TO_DATE = "build.artifact.up_to_date"
    ARTIFACT_BUILT = "build.artifact.built"
    ARTIFACT_DEGRADED = "build.artifact.degraded"
    ARTIFACT_ERROR = "build.artifact.error"
    CACHE_WARNING = "build.cache.warning"


__all__ = ["BuildEvent"]
