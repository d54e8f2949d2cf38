"""
Summary: Verify source discovery and derived output locations.
Why: Logical paths are cache keys; they must be stable and collision-aware.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from glowc.config import BuildSettings
from glowc.features.build.usecases import derive_paths, discover_sources


def test_discover_sources_is_recursive_and_sorted(
    settings: BuildSettings, write_effect: Callable[..., Path]
) -> None:
    _ = write_effect("b/Smoke.glow")
    _ = write_effect("Fire.glow")
    _ = write_effect("a/Water.glow")
    _ = (settings.effects_root / "notes.txt").write_text("ignored", encoding="utf-8")

    names = [path.relative_to(settings.effects_root.resolve()).as_posix() for path in discover_sources(settings.effects_root)]

    assert names == ["Fire.glow", "a/Water.glow", "b/Smoke.glow"]


def test_discover_sources_missing_root(tmp_path: Path) -> None:
    assert discover_sources(tmp_path / "nothing") == []


def test_derive_paths_uses_stem_and_generated_root(
    settings: BuildSettings, write_effect: Callable[..., Path]
) -> None:
    source = write_effect("deep/Fire.glow")

    paths = derive_paths(source.resolve(), settings)

    assert paths.logical_source == "Effects/deep/Fire.glow"
    assert paths.logical_output == "Effects_Generated/Fire.shader"
    assert paths.logical_sidecar == "Effects_Generated/Fire_thumbnail.png"
    assert paths.artifact_name == "Fire"


def test_collision_key_ignores_case(settings: BuildSettings, write_effect: Callable[..., Path]) -> None:
    upper = derive_paths(write_effect("a/Water.glow").resolve(), settings)
    lower = derive_paths(write_effect("b/water.glow").resolve(), settings)

    assert upper.logical_output != lower.logical_output
    assert upper.collision_key == lower.collision_key
