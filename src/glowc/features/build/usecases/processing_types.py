"""src/glowc/features/build/usecases/processing_types.py
Where: Build feature usecases layer.
What: Shared enums and dataclasses for the per-artifact state machine and pass report.
Why: Failures carry their classification as data so the runner never decides by catch site.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from glowc.features.templating import Diagnostic


class FailureKind(StrEnum):
    """How far a failure reaches."""

    FATAL_CONFIG = "fatal_config"
    ARTIFACT_SKIP = "artifact_skip"
    DEGRADED = "degraded"
    CACHE_IO_WARNING = "cache_io_warning"


class ArtifactStage(StrEnum):
    """Stage of the per-artifact pipeline a result or failure refers to."""

    DISCOVERED = "discovered"
    PATH_CHECK = "path_check"
    DIGEST = "digest"
    STALE_CHECK = "stale_check"
    VALIDATE = "validate"
    GENERATE = "generate"
    WRITE = "write"
    IMPORT = "import"
    THUMBNAIL = "thumbnail"
    CACHE_UPDATE = "cache_update"
    SHARED_INPUTS = "shared_inputs"
    CACHE_SAVE = "cache_save"


class ArtifactState(StrEnum):
    """Terminal states of one artifact within a pass."""

    BUILT = "built"
    SKIPPED_UP_TO_DATE = "skipped_up_to_date"
    SKIPPED_ERROR = "skipped_error"


@dataclass(frozen=True, slots=True)
class BuildFailure:
    """A classified failure and the stage it happened in."""

    kind: FailureKind
    stage: ArtifactStage
    reason: str


@dataclass
class ArtifactResult:
    """Outcome of processing one source artifact."""

    source_path: Path
    logical_path: str
    state: ArtifactState
    output_path: Path | None = None
    sidecar_path: Path | None = None
    failure: BuildFailure | None = None
    warnings: list[BuildFailure] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    stale_reasons: list[str] = field(default_factory=list)

    @property
    def built(self) -> bool:
        return self.state is ArtifactState.BUILT

    @property
    def failed(self) -> bool:
        return self.state is ArtifactState.SKIPPED_ERROR

    @property
    def degraded(self) -> bool:
        return any(warning.kind is FailureKind.DEGRADED for warning in self.warnings)


@dataclass
class BuildReport:
    """Summary of one build pass."""

    pass_id: str
    results: list[ArtifactResult] = field(default_factory=list)
    fatal: BuildFailure | None = None
    cache_warning: BuildFailure | None = None
    cancelled: bool = False
    total: int = 0
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def compiled(self) -> int:
        return sum(1 for result in self.results if result.built)

    @property
    def up_to_date(self) -> int:
        return sum(1 for result in self.results if result.state is ArtifactState.SKIPPED_UP_TO_DATE)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if result.failed)

    @property
    def degraded(self) -> int:
        return sum(1 for result in self.results if result.degraded)

    @property
    def succeeded(self) -> bool:
        """True when the pass ran to completion without fatal or per-artifact errors."""

        return self.fatal is None and not self.cancelled and self.failed == 0

    def finish(self) -> None:
        self.end_time = time.perf_counter()

    def duration_seconds(self) -> float:
        """Return the elapsed pass time in seconds."""

        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time

    def summary_extra(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "pass_id": self.pass_id,
            "total": self.total,
            "compiled": self.compiled,
            "up_to_date": self.up_to_date,
            "failed": self.failed,
            "degraded": self.degraded,
            "cancelled": self.cancelled,
            "duration_seconds": round(self.duration_seconds(), 4),
        }


__all__ = [
    "ArtifactResult",
    "ArtifactStage",
    "ArtifactState",
    "BuildFailure",
    "BuildReport",
    "FailureKind",
]
