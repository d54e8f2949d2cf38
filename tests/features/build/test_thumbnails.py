"""Tests for the thumbnail renderer adapters."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from pytest_mock import MockerFixture

from glowc.features.build import CompiledProgram
from glowc.features.build.adapters import CommandThumbnailRenderer, PlaceholderThumbnailRenderer


def test_placeholder_renderer_reuses_scan_texture(tmp_path: Path) -> None:
    scan = tmp_path / "scan.png"
    _ = scan.write_bytes(b"scan-bytes")
    program = CompiledProgram(output_path=tmp_path / "Fire.shader")

    assert PlaceholderThumbnailRenderer().render(program, scan, None, 64) == b"scan-bytes"
    assert PlaceholderThumbnailRenderer().render(program, None, None, 64) is None
    assert PlaceholderThumbnailRenderer().render(program, tmp_path / "gone.png", None, 64) is None


def test_command_renderer_fills_placeholders(tmp_path: Path) -> None:
    renderer = CommandThumbnailRenderer(
        ["render", "{program}", "--scan={scan}", "--depth={depth}", "-w", "{width}", "-o", "{output}"]
    )
    program = CompiledProgram(output_path=tmp_path / "Fire.shader")

    cmd = renderer.build_command(program, tmp_path / "scan.png", None, 256, tmp_path / "out.png")

    assert cmd == [
        "render",
        str(tmp_path / "Fire.shader"),
        f"--scan={tmp_path / 'scan.png'}",
        "--depth=",
        "-w",
        "256",
        "-o",
        str(tmp_path / "out.png"),
    ]


def test_command_renderer_reads_written_png(tmp_path: Path, mocker: MockerFixture) -> None:
    def _fake_run(cmd: list[str], **_kwargs: Any) -> subprocess.CompletedProcess[str]:
        _ = Path(cmd[-1]).write_bytes(b"\x89PNG")
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    _ = mocker.patch("glowc.features.build.adapters.thumbnails.subprocess.run", side_effect=_fake_run)
    renderer = CommandThumbnailRenderer(["render", "{output}"])

    image = renderer.render(CompiledProgram(output_path=tmp_path / "Fire.shader"), None, None, 64)

    assert image == b"\x89PNG"


def test_command_renderer_failure_returns_none(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "glowc.features.build.adapters.thumbnails.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="no GPU"),
    )
    renderer = CommandThumbnailRenderer(["render", "{output}"])

    assert renderer.render(CompiledProgram(output_path=tmp_path / "Fire.shader"), None, None, 64) is None
