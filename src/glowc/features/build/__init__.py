# Where: glowc.features.build
# What: Expose the build orchestrator, its result types and collaborator ports.
# Why: Application services compose a pass from this surface only.

from .usecases import (
    ArtifactResult,
    ArtifactStage,
    ArtifactState,
    BuildFailure,
    BuildOrchestrator,
    BuildReport,
    CompiledProgram,
    FailureKind,
    FilesystemPort,
    ImportOutcome,
    ProgramImporterPort,
    ThumbnailRendererPort,
)

__all__ = [
    "ArtifactResult",
    "ArtifactStage",
    "ArtifactState",
    "BuildFailure",
    "BuildOrchestrator",
    "BuildReport",
    "CompiledProgram",
    "FailureKind",
    "FilesystemPort",
    "ImportOutcome",
    "ProgramImporterPort",
    "ThumbnailRendererPort",
]
