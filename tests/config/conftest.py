"""Shared pytest fixtures for configuration-focused tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def portable_project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary project root that auto-detection will pick up."""

    root = tmp_path / "proj"
    root.mkdir()
    _ = (root / "pyproject.toml").write_text("[project]\nname='tmp'\n")
    monkeypatch.chdir(root)
    monkeypatch.delenv("GLOWC_CONFIG_PATH", raising=False)
    return root.resolve()
