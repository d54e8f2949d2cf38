"""Shared pytest fixtures: a throwaway project layout and fake build collaborators."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from glowc.config import BuildSettings
from glowc.config.paths import bundled_template_dir
from glowc.features.build import CompiledProgram, ImportOutcome

SMALL_TEMPLATE = "\n".join(
    [
        'Shader "Glow/<EFFECT_NAME_PLACEHOLDER>"',
        "{",
        "    Properties",
        "    {",
        "<DERIVED_USER_PROPERTIES_PLACEHOLDER>",
        "    }",
        "    HLSLPROGRAM",
        "<USER_CODE_PLACEHOLDER>",
        "    ENDHLSL",
        "}",
        "",
    ]
)

SIMPLE_EFFECT = '_Speed ("Speed", Float) = 2.5\nfloat4 EffectMain(){ return 0; }\n'


class FakeImporter:
    """Importer double recording calls; fails for configured output stems."""

    def __init__(self) -> None:
        self.calls: list[Path] = []
        self.failing: dict[str, str] = {}
        self.raising: set[str] = set()

    def import_program(self, output_path: Path, text: str) -> ImportOutcome:
        self.calls.append(output_path)
        if output_path.stem in self.raising:
            raise RuntimeError("importer crashed")
        if output_path.stem in self.failing:
            return ImportOutcome(None, self.failing[output_path.stem])
        return ImportOutcome(CompiledProgram(output_path=output_path))


class FakeRenderer:
    """Thumbnail renderer double returning fixed bytes or nothing."""

    def __init__(self, image: bytes | None = b"\x89PNG fake") -> None:
        self.image = image
        self.calls: list[tuple[CompiledProgram, Path | None, Path | None, int]] = []

    def render(
        self,
        program: CompiledProgram,
        scan_texture: Path | None,
        depth_texture: Path | None,
        width: int,
    ) -> bytes | None:
        self.calls.append((program, scan_texture, depth_texture, width))
        return self.image


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a project with a copy of the bundled template and core library."""

    root = tmp_path / "project"
    (root / "Effects").mkdir(parents=True)
    _ = (root / "pyproject.toml").write_text("[project]\nname='effects'\n", encoding="utf-8")
    bundled = bundled_template_dir()
    for name in ("EffectTemplate.shader.txt", "Core.hlsl"):
        _ = (root / name).write_bytes((bundled / name).read_bytes())
    return root


@pytest.fixture
def settings(project_root: Path) -> BuildSettings:
    generated = project_root / "Effects_Generated"
    return BuildSettings(
        project_root=project_root,
        effects_root=project_root / "Effects",
        generated_root=generated,
        cache_file=generated / ".glowcache.json",
        template_path=project_root / "EffectTemplate.shader.txt",
        core_library_path=project_root / "Core.hlsl",
    )


@pytest.fixture
def write_effect(project_root: Path) -> Callable[..., Path]:
    """Return a helper writing ``Effects/<relative>`` and returning its path."""

    def _write(relative: str, text: str = SIMPLE_EFFECT) -> Path:
        path = project_root / "Effects" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def importer() -> FakeImporter:
    return FakeImporter()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def small_template_text() -> str:
    """Ten-line template: declarations token on line 5, body token on line 8."""

    return SMALL_TEMPLATE


@pytest.fixture
def simple_effect() -> str:
    return SIMPLE_EFFECT
