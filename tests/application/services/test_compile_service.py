"""Tests for the compile application service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from glowc.application.services.compile_service import (
    CompileEffectsService,
    CompileRequest,
    default_importer,
    default_thumbnail_renderer,
)
from glowc.config import BuildSettings
from glowc.features.build import BuildOrchestrator
from glowc.features.build.adapters import (
    CommandImporter,
    CommandThumbnailRenderer,
    FileImporter,
    LocalFilesystemAdapter,
    PlaceholderThumbnailRenderer,
)
from glowc.features.templating import NOT_MAPPABLE, TemplateError


def _service(importer: Any, renderer: Any) -> CompileEffectsService:
    return CompileEffectsService(
        importer_factory=lambda _settings: importer,
        thumbnail_factory=lambda _settings: renderer,
    )


def test_default_collaborators_follow_settings(settings: BuildSettings) -> None:
    assert isinstance(default_importer(settings), FileImporter)
    assert isinstance(default_thumbnail_renderer(settings), PlaceholderThumbnailRenderer)

    configured = replace(
        settings,
        compile_command=("dxc", "{output}"),
        thumbnail_command=("render", "{output}"),
    )
    assert isinstance(default_importer(configured), CommandImporter)
    assert isinstance(default_thumbnail_renderer(configured), CommandThumbnailRenderer)


def test_build_orchestrator_uses_factories(settings: BuildSettings) -> None:
    captured: dict[str, Any] = {}

    def _factory(received: BuildSettings, **kwargs: Any) -> MagicMock:
        captured["settings"] = received
        captured.update(kwargs)
        return MagicMock(spec=BuildOrchestrator)

    importer = MagicMock()
    service = CompileEffectsService(
        importer_factory=lambda _settings: importer,
        orchestrator_factory=_factory,
    )

    _ = service.build_orchestrator(CompileRequest(settings=settings))

    assert captured["settings"] is settings
    assert captured["importer"] is importer
    assert isinstance(captured["filesystem"], LocalFilesystemAdapter)
    assert isinstance(captured["thumbnail_renderer"], PlaceholderThumbnailRenderer)


def test_compile_all_runs_a_pass(
    settings: BuildSettings,
    write_effect: Callable[..., Path],
    importer: Any,
    renderer: Any,
) -> None:
    _ = write_effect("Fire.glow")
    seen: list[int] = []

    report = _service(importer, renderer).compile_all(
        CompileRequest(settings=settings),
        progress_callback=lambda done, _total, _path: seen.append(done),
    )

    assert report.compiled == 1
    assert seen == [1]
    assert (settings.generated_root / "Fire.shader").is_file()


def test_validate_sources_reports_each_problem(
    settings: BuildSettings,
    write_effect: Callable[..., Path],
    importer: Any,
    renderer: Any,
) -> None:
    _ = write_effect("a/Water.glow")
    _ = write_effect("b/water.glow")
    _ = write_effect("Empty.glow", "   \n")
    _ = write_effect("NoEntry.glow", "float4 Other() { return 0; }\n")

    checks = _service(importer, renderer).validate_sources(CompileRequest(settings=settings))

    reasons = {check.logical_path: check.reason for check in checks}
    assert reasons["Effects/Empty.glow"] == "empty source"
    assert reasons["Effects/NoEntry.glow"] == "missing entry function"
    assert reasons["Effects/a/Water.glow"] is None
    assert "already produced by Effects/a/Water.glow" in (reasons["Effects/b/water.glow"] or "")
    assert not settings.generated_root.exists()
    assert importer.calls == []


def test_map_line_translates_body_and_boilerplate(
    settings: BuildSettings,
    write_effect: Callable[..., Path],
    importer: Any,
    renderer: Any,
) -> None:
    source = write_effect("Fire.glow")
    service = _service(importer, renderer)
    request = CompileRequest(settings=settings)

    # Bundled template: body token on line 58, one primitive line, entry on source line 2.
    assert service.map_line(request, source, 59).source_line == 2
    assert service.map_line(request, source, 58).source_line == 1
    assert service.map_line(request, source, 3).source_line == NOT_MAPPABLE


def test_map_line_errors(
    settings: BuildSettings,
    write_effect: Callable[..., Path],
    importer: Any,
    renderer: Any,
) -> None:
    service = _service(importer, renderer)
    request = CompileRequest(settings=settings)

    with pytest.raises(ValueError):
        _ = service.map_line(request, settings.effects_root / "Missing.glow", 10)

    _ = settings.template_path.write_text("no tokens\n", encoding="utf-8")
    with pytest.raises(TemplateError):
        _ = service.map_line(request, write_effect("Fire.glow"), 10)
