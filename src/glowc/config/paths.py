"""Shared path utilities for configuration and project locations.

This module centralizes how the compiler discovers the project it is
building and where its own configuration and logs live.

Policy (portable by default):
- Project root: nearest parent of the working directory containing
  ``pyproject.toml``, ``.git`` or ``config/glowc.toml``.
- Config: ``<project_root>/config/glowc.toml`` unless overridden by
  ``GLOWC_CONFIG_PATH``.
- Logs: ``<project_root>/logs/glowc.log``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


_ENV_CONFIG_PATH: Final[str] = "GLOWC_CONFIG_PATH"
_CONFIG_RELATIVE: Final[Path] = Path("config") / "glowc.toml"
_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def detect_project_root(start: Path | None = None) -> Path:
    """Detect the project root by walking up parents.

    Looks for markers like ``pyproject.toml``, ``.git`` or an existing
    ``config/glowc.toml``.

    Args:
        start: Starting directory. Defaults to the current working directory.

    Returns:
        Path: Detected project root, or ``start`` itself when no marker is found.
    """
    here = (start or Path.cwd()).resolve()
    for p in [here, *here.parents]:
        if (p / _CONFIG_RELATIVE).exists():
            return p
        if any((p / marker).exists() for marker in _ROOT_MARKERS):
            return p
    return here


def default_config_path(project_root: Path | None = None) -> Path:
    """Get the default path to the TOML config file.

    Portable layout: ``<project_root>/config/glowc.toml``.
    """
    return resolve_overridable_path(
        explicit_path=None,
        env=None,
        env_var=_ENV_CONFIG_PATH,
        default_factory=lambda: (project_root or detect_project_root()) / _CONFIG_RELATIVE,
    )


def default_log_dir(project_root: Path | None = None) -> Path:
    """Get the default directory for log files."""

    return ((project_root or detect_project_root()) / "logs").resolve()


def default_log_file(project_root: Path | None = None) -> Path:
    """Get the default log file path."""

    return (default_log_dir(project_root) / "glowc.log").resolve()


def bundled_template_dir() -> Path:
    """Directory holding the template and shared library shipped with the package."""

    return (Path(__file__).resolve().parent.parent / "templates").resolve()


def to_logical_path(path: Path, project_root: Path) -> str:
    """Return the stable POSIX identity of ``path`` relative to ``project_root``.

    Paths outside the project root keep their absolute POSIX form.
    """

    resolved = path.resolve()
    try:
        return resolved.relative_to(project_root.resolve()).as_posix()
    except ValueError:
        return resolved.as_posix()


def from_logical_path(logical_path: str, project_root: Path) -> Path:
    """Inverse of :func:`to_logical_path`."""

    candidate = Path(logical_path)
    if candidate.is_absolute():
        return candidate
    return (project_root / candidate).resolve()


__all__ = [
    "bundled_template_dir",
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "detect_project_root",
    "from_logical_path",
    "resolve_overridable_path",
    "to_logical_path",
]
