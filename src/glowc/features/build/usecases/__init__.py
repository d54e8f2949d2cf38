"""Build use cases: artifact discovery, per-artifact state machine and the pass orchestrator."""

from .artifact_paths import ArtifactPaths, derive_paths, discover_sources
from .artifact_runner import ArtifactBuildContext, run_artifact
from .build_runner import BuildOrchestrator, CancelCheck, ProgressCallback
from .ports import (
    CompiledProgram,
    FilesystemPort,
    ImportOutcome,
    ProgramImporterPort,
    ThumbnailRendererPort,
)
from .processing_types import (
    ArtifactResult,
    ArtifactStage,
    ArtifactState,
    BuildFailure,
    BuildReport,
    FailureKind,
)

__all__ = [
    "ArtifactBuildContext",
    "ArtifactPaths",
    "ArtifactResult",
    "ArtifactStage",
    "ArtifactState",
    "BuildFailure",
    "BuildOrchestrator",
    "BuildReport",
    "CancelCheck",
    "CompiledProgram",
    "FailureKind",
    "FilesystemPort",
    "ImportOutcome",
    "ProgramImporterPort",
    "ProgressCallback",
    "ThumbnailRendererPort",
    "derive_paths",
    "discover_sources",
    "run_artifact",
]
