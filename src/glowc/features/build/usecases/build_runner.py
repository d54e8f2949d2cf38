"""src/glowc/features/build/usecases/build_runner.py
What: Run one incremental build pass over every discovered effect source.
Why: Own the shared-input checks, collision detection, cancellation and the single cache save.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from pathlib import Path

from glowc.config import BuildSettings
from glowc.features.cache import CompileCache, digest_file, is_missing
from glowc.features.templating import (
    TemplateError,
    TemplateProcessor,
    TemplateRenderer,
    load_template,
)
from glowc.platform.logging import log_event
from glowc.shared import BuildEvent

from .artifact_paths import ArtifactPaths, derive_paths, discover_sources
from .artifact_runner import ArtifactBuildContext, run_artifact
from .ports import FilesystemPort, ProgramImporterPort, ThumbnailRendererPort
from .processing_types import (
    ArtifactResult,
    ArtifactStage,
    ArtifactState,
    BuildFailure,
    BuildReport,
    FailureKind,
)

ProgressCallback = Callable[[int, int, Path], None]
CancelCheck = Callable[[], bool]


class BuildOrchestrator:
    """Discover sources, rebuild the stale ones and persist the cache once."""

    def __init__(
        self,
        settings: BuildSettings,
        *,
        importer: ProgramImporterPort,
        thumbnail_renderer: ThumbnailRendererPort,
        filesystem: FilesystemPort,
        template_renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings
        self.importer = importer
        self.thumbnail_renderer = thumbnail_renderer
        self.filesystem = filesystem
        self.template_renderer = template_renderer

    def run(
        self,
        *,
        should_cancel: CancelCheck | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BuildReport:
        """Execute one pass and return its report.

        Args:
            should_cancel: Checked before each artifact; returning True stops
                the pass after the current artifact.
            progress_callback: Receives (done, total, current_source).

        Returns:
            BuildReport: Per-artifact results plus pass-level failures.
        """

        settings = self.settings
        report = BuildReport(pass_id=uuid.uuid4().hex[:12])

        template_digest = digest_file(settings.template_path)
        core_lib_digest = digest_file(settings.core_library_path)
        if is_missing(template_digest):
            return self._fatal(report, f"template is missing or unreadable: {settings.template_path}")
        if is_missing(core_lib_digest):
            return self._fatal(
                report, f"core library is missing or unreadable: {settings.core_library_path}"
            )
        try:
            template = load_template(settings.template_path)
        except TemplateError as exc:
            return self._fatal(report, str(exc))

        sources = discover_sources(settings.effects_root)
        report.total = len(sources)
        cache = CompileCache.load(settings.cache_file)

        if not sources:
            log_event(
                logging.WARNING,
                BuildEvent.PASS_NO_SOURCES,
                "No effect sources found [id=%s, path=%s]",
                report.pass_id,
                settings.effects_root,
                pass_id=report.pass_id,
                effects_root=settings.effects_root,
                total=0,
            )
        else:
            log_event(
                logging.INFO,
                BuildEvent.PASS_START,
                "Build pass started [id=%s, sources=%d, root=%s]",
                report.pass_id,
                len(sources),
                settings.effects_root,
                pass_id=report.pass_id,
                effects_root=settings.effects_root,
                total=len(sources),
            )

        ctx = ArtifactBuildContext(
            pass_id=report.pass_id,
            settings=settings,
            cache=cache,
            processor=TemplateProcessor(template, self.template_renderer),
            importer=self.importer,
            thumbnail_renderer=self.thumbnail_renderer,
            filesystem=self.filesystem,
            template_digest=template_digest,
            core_lib_digest=core_lib_digest,
        )

        claimed: dict[str, str] = {}
        for index, source in enumerate(sources, start=1):
            if should_cancel is not None and should_cancel():
                report.cancelled = True
                break

            paths = derive_paths(source, settings)
            owner = claimed.get(paths.collision_key)
            if owner is not None:
                result = self._collision(report, paths, owner, index)
            else:
                claimed[paths.collision_key] = paths.logical_source
                try:
                    result = run_artifact(ctx, paths, sequence=index, total=report.total)
                except Exception as exc:  # keep the batch alive
                    reason = str(exc) if str(exc) else type(exc).__name__
                    log_event(
                        logging.ERROR,
                        BuildEvent.ARTIFACT_ERROR,
                        "Unhandled error building %s: %s",
                        paths.logical_source,
                        reason,
                        pass_id=report.pass_id,
                        sequence=index,
                        total=report.total,
                        source_path=paths.logical_source,
                        reason=reason,
                    )
                    result = ArtifactResult(
                        source_path=paths.source,
                        logical_path=paths.logical_source,
                        state=ArtifactState.SKIPPED_ERROR,
                        failure=BuildFailure(FailureKind.ARTIFACT_SKIP, ArtifactStage.DISCOVERED, reason),
                    )

            report.results.append(result)
            if progress_callback is not None:
                progress_callback(index, report.total, source)

        if not cache.save(settings.cache_file):
            report.cache_warning = BuildFailure(
                FailureKind.CACHE_IO_WARNING,
                ArtifactStage.CACHE_SAVE,
                f"could not write {settings.cache_file}",
            )

        report.finish()
        if report.cancelled:
            log_event(
                logging.WARNING,
                BuildEvent.PASS_CANCELLED,
                "Build pass cancelled [id=%s, done=%d/%d]",
                report.pass_id,
                len(report.results),
                report.total,
                **report.summary_extra(),
            )
        else:
            log_event(
                logging.INFO,
                BuildEvent.PASS_COMPLETE,
                "Build pass completed [id=%s, compiled=%d, up_to_date=%d, failed=%d, duration=%.2fs]",
                report.pass_id,
                report.compiled,
                report.up_to_date,
                report.failed,
                report.duration_seconds(),
                **report.summary_extra(),
            )
        return report

    def _fatal(self, report: BuildReport, reason: str) -> BuildReport:
        report.fatal = BuildFailure(FailureKind.FATAL_CONFIG, ArtifactStage.SHARED_INPUTS, reason)
        report.finish()
        log_event(
            logging.ERROR,
            BuildEvent.PASS_FATAL,
            "Build pass aborted [id=%s]: %s",
            report.pass_id,
            reason,
            pass_id=report.pass_id,
            reason=reason,
        )
        return report

    def _collision(
        self,
        report: BuildReport,
        paths: ArtifactPaths,
        owner: str,
        sequence: int,
    ) -> ArtifactResult:
        reason = f"output path {paths.logical_output} already produced by {owner}"
        log_event(
            logging.ERROR,
            BuildEvent.ARTIFACT_ERROR,
            "Skipping %s: %s",
            paths.logical_source,
            reason,
            pass_id=report.pass_id,
            sequence=sequence,
            total=report.total,
            source_path=paths.logical_source,
            output_path=paths.logical_output,
            reason=reason,
        )
        return ArtifactResult(
            source_path=paths.source,
            logical_path=paths.logical_source,
            state=ArtifactState.SKIPPED_ERROR,
            output_path=paths.output,
            sidecar_path=paths.sidecar,
            failure=BuildFailure(FailureKind.ARTIFACT_SKIP, ArtifactStage.PATH_CHECK, reason),
        )


__all__ = ["BuildOrchestrator", "CancelCheck", "ProgressCallback"]
