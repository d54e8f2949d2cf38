"""Application service for compiling glow effects.

This layer centralizes construction of the build orchestrator and its
collaborators so that multiple UIs (CLI, editor hooks) can reuse the same
use cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, final

from glowc.config import BuildSettings
from glowc.config.paths import to_logical_path
from glowc.features.build import (
    BuildOrchestrator,
    BuildReport,
    FilesystemPort,
    ProgramImporterPort,
    ThumbnailRendererPort,
)
from glowc.features.build.adapters import (
    CommandImporter,
    CommandThumbnailRenderer,
    FileImporter,
    LocalFilesystemAdapter,
    PlaceholderThumbnailRenderer,
)
from glowc.features.build.usecases import derive_paths, discover_sources
from glowc.features.templating import (
    GenerationFailure,
    LineMapper,
    TemplateProcessor,
    ValidationResult,
    load_template,
    validate_source,
)
from glowc.platform.logging import logger


@dataclass(frozen=True)
class CompileRequest:
    """Input parameters for compile operations.

    Attributes:
        settings: Resolved locations and collaborator commands.
    """

    settings: BuildSettings


@dataclass(frozen=True, slots=True)
class SourceCheck:
    """Validation outcome for one discovered source."""

    source_path: Path
    logical_path: str
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


@dataclass(frozen=True, slots=True)
class LineMapping:
    """A generated-output line and the source line it maps to (0 when not mappable)."""

    source_path: Path
    output_line: int
    source_line: int


def default_importer(settings: BuildSettings) -> ProgramImporterPort:
    if settings.compile_command:
        return CommandImporter(settings.compile_command)
    return FileImporter()


def default_thumbnail_renderer(settings: BuildSettings) -> ThumbnailRendererPort:
    if settings.thumbnail_command:
        return CommandThumbnailRenderer(settings.thumbnail_command)
    return PlaceholderThumbnailRenderer()


@final
class CompileEffectsService:
    """Application service that orchestrates compiling effect sources."""

    def __init__(
        self,
        *,
        filesystem_factory: Callable[[], FilesystemPort] | None = None,
        importer_factory: Callable[[BuildSettings], ProgramImporterPort] | None = None,
        thumbnail_factory: Callable[[BuildSettings], ThumbnailRendererPort] | None = None,
        orchestrator_factory: Callable[..., BuildOrchestrator] | None = None,
    ) -> None:
        """Create a service with overridable infrastructure factories.

        Tests can inject light-weight doubles while production code relies on
        the default adapters.
        """

        self._filesystem_factory: Callable[[], FilesystemPort] = (
            filesystem_factory or LocalFilesystemAdapter
        )
        self._importer_factory: Callable[[BuildSettings], ProgramImporterPort] = (
            importer_factory or default_importer
        )
        self._thumbnail_factory: Callable[[BuildSettings], ThumbnailRendererPort] = (
            thumbnail_factory or default_thumbnail_renderer
        )
        self._orchestrator_factory: Callable[..., BuildOrchestrator] = (
            orchestrator_factory or BuildOrchestrator
        )

    def build_orchestrator(self, request: CompileRequest) -> BuildOrchestrator:
        """Build a ``BuildOrchestrator`` wired with the configured collaborators."""

        settings = request.settings
        return self._orchestrator_factory(
            settings,
            importer=self._importer_factory(settings),
            thumbnail_renderer=self._thumbnail_factory(settings),
            filesystem=self._filesystem_factory(),
        )

    def compile_all(
        self,
        request: CompileRequest,
        *,
        should_cancel: Callable[[], bool] | None = None,
        progress_callback: Callable[[int, int, Path], None] | None = None,
    ) -> BuildReport:
        """Run one incremental build pass.

        Args:
            request: Compile operation parameters.
            should_cancel: Checked between artifacts.
            progress_callback: Receives (done, total, current_source).

        Returns:
            Pass report.
        """
        orchestrator = self.build_orchestrator(request)
        return orchestrator.run(should_cancel=should_cancel, progress_callback=progress_callback)

    def validate_sources(self, request: CompileRequest) -> list[SourceCheck]:
        """Validate every discovered source without writing anything."""

        settings = request.settings
        checks: list[SourceCheck] = []
        claimed: dict[str, str] = {}
        for source in discover_sources(settings.effects_root):
            paths = derive_paths(source, settings)
            owner = claimed.setdefault(paths.collision_key, paths.logical_source)
            if owner != paths.logical_source:
                reason = f"output path {paths.logical_output} already produced by {owner}"
                checks.append(SourceCheck(source, paths.logical_source, reason))
                continue
            try:
                text = source.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                checks.append(SourceCheck(source, paths.logical_source, f"cannot read source: {exc}"))
                continue
            result: ValidationResult = validate_source(text)
            checks.append(SourceCheck(source, paths.logical_source, result.reason))

        failed = sum(1 for check in checks if not check.ok)
        logger.debug("Validated %d source(s), %d failed", len(checks), failed)
        return checks

    def map_line(self, request: CompileRequest, source: Path, output_line: int) -> LineMapping:
        """Translate ``output_line`` of ``source``'s generated shader to a source line.

        Raises:
            TemplateError: If the configured template cannot be loaded.
            ValueError: If the source cannot be read or does not generate.
        """
        settings = request.settings
        processor = TemplateProcessor(load_template(settings.template_path))
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ValueError(f"Cannot read {source}: {exc}") from exc

        unit = processor.generate(text, source.stem)
        if isinstance(unit, GenerationFailure):
            raise ValueError(
                f"{to_logical_path(source, settings.project_root)}: {unit.reason}"
            )
        source_line = LineMapper(unit.line_map).translate(output_line)
        return LineMapping(source_path=source, output_line=output_line, source_line=source_line)


__all__ = [
    "CompileEffectsService",
    "CompileRequest",
    "LineMapping",
    "SourceCheck",
    "default_importer",
    "default_thumbnail_renderer",
]
