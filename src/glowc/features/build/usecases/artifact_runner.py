# /*
# Where: features/build/usecases/artifact_runner.py
# What: Drive one source artifact from digest to cache update.
# Why: Keep the pass loop lean by isolating the per-artifact state machine.
# Assumptions:
# - Shared template and core-library digests were computed once by the caller.
# - Collaborator calls may raise anything; each call is wrapped and classified.
# Trade-offs:
# - A failed thumbnail still records the cache entry (DEGRADED), so the stale
#   sidecar is removed to force a retry on the next pass.
# */

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from glowc.config import BuildSettings
from glowc.config.paths import from_logical_path
from glowc.features.cache import (
    CacheEntry,
    CompileCache,
    CurrentInputs,
    digest_bytes,
    staleness_reasons,
)
from glowc.features.templating import (
    GenerationFailure,
    LineMapper,
    TemplateProcessor,
    parse_diagnostics,
    remap_diagnostics,
)
from glowc.platform.logging import log_event
from glowc.shared import BuildEvent

from .artifact_paths import ArtifactPaths
from .ports import CompiledProgram, FilesystemPort, ProgramImporterPort, ThumbnailRendererPort
from .processing_types import (
    ArtifactResult,
    ArtifactStage,
    ArtifactState,
    BuildFailure,
    FailureKind,
)


def _describe(exc: BaseException) -> str:
    return str(exc) if str(exc) else type(exc).__name__


@dataclass(slots=True)
class ArtifactBuildContext:
    """Pass-wide state shared by every artifact."""

    pass_id: str
    settings: BuildSettings
    cache: CompileCache
    processor: TemplateProcessor
    importer: ProgramImporterPort
    thumbnail_renderer: ThumbnailRendererPort
    filesystem: FilesystemPort
    template_digest: str
    core_lib_digest: str

    def logical_exists(self, logical_path: str) -> bool:
        return self.filesystem.exists(from_logical_path(logical_path, self.settings.project_root))


class ArtifactRun:
    """One pass of the state machine for a single artifact."""

    def __init__(
        self,
        ctx: ArtifactBuildContext,
        paths: ArtifactPaths,
        *,
        sequence: int | None = None,
        total: int | None = None,
    ) -> None:
        self.ctx = ctx
        self.paths = paths
        self.sequence = sequence
        self.total = total
        self.result = ArtifactResult(
            source_path=paths.source,
            logical_path=paths.logical_source,
            state=ArtifactState.SKIPPED_ERROR,
            output_path=paths.output,
            sidecar_path=paths.sidecar,
        )

    def _log(self, level: int, event: BuildEvent, message: str, *args: object, **context: object) -> None:
        log_event(
            level,
            event,
            message,
            *args,
            pass_id=self.ctx.pass_id,
            sequence=self.sequence,
            total=self.total,
            source_path=self.paths.logical_source,
            **context,
        )

    def skip(self, stage: ArtifactStage, reason: str) -> ArtifactResult:
        """Finish as ``SKIPPED_ERROR``; the cache entry is left untouched."""

        self.result.state = ArtifactState.SKIPPED_ERROR
        self.result.failure = BuildFailure(FailureKind.ARTIFACT_SKIP, stage, reason)
        self._log(
            logging.ERROR,
            BuildEvent.ARTIFACT_ERROR,
            "Skipping %s at %s: %s",
            self.paths.logical_source,
            stage.value,
            reason,
            stage=stage.value,
            reason=reason,
        )
        return self.result

    def degrade(self, stage: ArtifactStage, reason: str) -> None:
        self.result.warnings.append(BuildFailure(FailureKind.DEGRADED, stage, reason))
        self._log(
            logging.WARNING,
            BuildEvent.ARTIFACT_DEGRADED,
            "Degraded build for %s at %s: %s",
            self.paths.logical_source,
            stage.value,
            reason,
            stage=stage.value,
            reason=reason,
        )

    def run(self) -> ArtifactResult:
        ctx = self.ctx
        paths = self.paths

        # One read per pass: the digest and the generated text come from the same bytes.
        try:
            source_bytes = paths.source.read_bytes()
        except OSError as exc:
            return self.skip(ArtifactStage.DIGEST, f"source file is unreadable: {_describe(exc)}")
        source_digest = digest_bytes(source_bytes)

        current = CurrentInputs(
            source_digest=source_digest,
            template_digest=ctx.template_digest,
            core_lib_digest=ctx.core_lib_digest,
            generator_version=ctx.settings.generator_version,
            output_path=paths.logical_output,
            sidecar_path=paths.logical_sidecar,
        )
        try:
            reasons = staleness_reasons(
                ctx.cache.get(paths.logical_source),
                current,
                path_exists=ctx.logical_exists,
            )
        except OSError as exc:
            return self.skip(ArtifactStage.STALE_CHECK, _describe(exc))

        if not reasons:
            self.result.state = ArtifactState.SKIPPED_UP_TO_DATE
            self._log(
                logging.INFO,
                BuildEvent.ARTIFACT_UP_TO_DATE,
                "Up to date: %s",
                paths.logical_source,
                output_path=paths.logical_output,
            )
            return self.result

        self.result.stale_reasons = [reason.value for reason in reasons]
        self._log(
            logging.DEBUG,
            BuildEvent.ARTIFACT_START,
            "Building %s [reasons=%s]",
            paths.logical_source,
            ",".join(self.result.stale_reasons),
            stale_reasons=self.result.stale_reasons,
        )

        try:
            source_text = source_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            return self.skip(ArtifactStage.DIGEST, f"cannot decode source: {_describe(exc)}")

        validation = ctx.processor.validate(source_text)
        if not validation.ok:
            return self.skip(ArtifactStage.VALIDATE, validation.reason or "invalid source")

        unit = ctx.processor.generate(source_text, paths.artifact_name)
        if isinstance(unit, GenerationFailure):
            return self.skip(ArtifactStage.GENERATE, unit.reason)

        try:
            ctx.filesystem.write_text(paths.output, unit.output_text)
        except OSError as exc:
            return self.skip(ArtifactStage.WRITE, _describe(exc))

        try:
            outcome = ctx.importer.import_program(paths.output, unit.output_text)
        except Exception as exc:  # collaborator boundary
            return self.skip(ArtifactStage.IMPORT, _describe(exc))

        if outcome.program is None:
            mapper = LineMapper(unit.line_map)
            self.result.diagnostics = remap_diagnostics(parse_diagnostics(outcome.diagnostics), mapper)
            for diagnostic in self.result.diagnostics:
                self._log(
                    logging.ERROR,
                    BuildEvent.ARTIFACT_ERROR,
                    "%s",
                    diagnostic.format(paths.logical_source),
                    line=diagnostic.line,
                    reason=diagnostic.message,
                )
            first = self.result.diagnostics[0].format(paths.logical_source) if self.result.diagnostics else None
            reason = "compiled program is not loadable"
            return self.skip(ArtifactStage.IMPORT, f"{reason}: {first}" if first else reason)

        self._render_thumbnail(outcome.program)

        entry = CacheEntry(
            source_path=paths.logical_source,
            output_path=paths.logical_output,
            sidecar_path=paths.logical_sidecar,
            source_digest=source_digest,
            template_digest=ctx.template_digest,
            core_lib_digest=ctx.core_lib_digest,
            generator_version=ctx.settings.generator_version,
        )
        if not ctx.cache.put(entry):
            return self.skip(ArtifactStage.CACHE_UPDATE, "cache rejected entry")

        self.result.state = ArtifactState.BUILT
        self._log(
            logging.INFO,
            BuildEvent.ARTIFACT_BUILT,
            "Built %s -> %s",
            paths.logical_source,
            paths.logical_output,
            output_path=paths.logical_output,
            degraded=self.result.degraded,
        )
        return self.result

    def _render_thumbnail(self, program: CompiledProgram) -> None:
        ctx = self.ctx
        settings = ctx.settings
        try:
            image = ctx.thumbnail_renderer.render(
                program,
                settings.default_scan_texture,
                settings.default_depth_texture,
                settings.thumbnail_width,
            )
        except Exception as exc:  # collaborator boundary
            self._drop_sidecar()
            self.degrade(ArtifactStage.THUMBNAIL, f"renderer failed: {_describe(exc)}")
            return

        if not image:
            self._drop_sidecar()
            self.degrade(ArtifactStage.THUMBNAIL, "no thumbnail produced")
            return

        try:
            ctx.filesystem.write_bytes(self.paths.sidecar, image)
        except OSError as exc:
            self._drop_sidecar()
            self.degrade(ArtifactStage.THUMBNAIL, f"cannot write thumbnail: {_describe(exc)}")

    def _drop_sidecar(self) -> None:
        try:
            self.ctx.filesystem.remove(self.paths.sidecar)
        except OSError as exc:
            self._log(
                logging.DEBUG,
                BuildEvent.ARTIFACT_DEGRADED,
                "Could not remove stale thumbnail %s: %s",
                self.paths.logical_sidecar,
                exc,
            )


def run_artifact(
    ctx: ArtifactBuildContext,
    paths: ArtifactPaths,
    *,
    sequence: int | None = None,
    total: int | None = None,
) -> ArtifactResult:
    """Process ``paths.source`` and return its terminal result."""

    return ArtifactRun(ctx, paths, sequence=sequence, total=total).run()


__all__ = ["ArtifactBuildContext", "ArtifactRun", "run_artifact"]
