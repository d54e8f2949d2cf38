"""Configuration management for glowc."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from glowc.config.file_ops import write_text_file
from glowc.config.paths import bundled_template_dir, default_config_path, detect_project_root
from glowc.config.settings import (
    CACHE_FILE_NAME,
    CORE_LIBRARY_FILE_NAME,
    DEFAULT_EFFECTS_DIR,
    DEFAULT_GENERATED_DIR,
    DEFAULT_THUMBNAIL_WIDTH,
    GENERATOR_VERSION,
    TEMPLATE_FILE_NAME,
)
from glowc.platform.logging import logger


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


def _command_field() -> Any:
    return field(default=None, metadata={"command": True})


@dataclass(frozen=True, slots=True)
class BuildSettings:
    """Absolute locations and knobs consumed by one build pass."""

    project_root: Path
    effects_root: Path
    generated_root: Path
    cache_file: Path
    template_path: Path
    core_library_path: Path
    generator_version: str = GENERATOR_VERSION
    thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH
    default_scan_texture: Path | None = None
    default_depth_texture: Path | None = None
    compile_command: tuple[str, ...] | None = None
    thumbnail_command: tuple[str, ...] | None = None


@dataclass
class Config:
    """Application configuration."""

    # Root all relative paths below are resolved against
    project_root: Path | None = _path_field()

    # Where *.glow sources live and where generated shaders go
    effects_root: Path | None = _path_field(Path(DEFAULT_EFFECTS_DIR))
    generated_root: Path | None = _path_field(Path(DEFAULT_GENERATED_DIR))
    cache_file: Path | None = _path_field()

    # Shared inputs; defaults to the files bundled with the package
    template_path: Path | None = _path_field()
    core_library_path: Path | None = _path_field()

    # External collaborators
    compile_command: list[str] | None = _command_field()
    thumbnail_command: list[str] | None = _command_field()
    default_scan_texture: Path | None = _path_field()
    default_depth_texture: Path | None = _path_field()
    thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH

    # Log file path
    log_file: Path | None = _path_field()

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects and validate value types.

        Only fields flagged through ``_path_field``/``_command_field`` metadata
        are converted, so typos in other fields still surface as errors.
        """

        for f in fields(self):
            value = getattr(self, f.name)
            if f.metadata.get("path", False):
                if isinstance(value, str):
                    setattr(self, f.name, Path(value) if value.strip() else None)
                elif value is not None and not isinstance(value, Path):
                    raise ConfigError(f"'{f.name}' must be a path string")
            elif f.metadata.get("command", False):
                if value is None:
                    continue
                if isinstance(value, str):
                    value = value.split()
                if not isinstance(value, list) or not all(isinstance(part, str) for part in value):
                    raise ConfigError(f"'{f.name}' must be a list of strings")
                setattr(self, f.name, list(value) or None)

        if isinstance(self.thumbnail_width, bool) or not isinstance(self.thumbnail_width, int):
            raise ConfigError("'thumbnail_width' must be an integer")
        if self.thumbnail_width <= 0:
            raise ConfigError("'thumbnail_width' must be positive")

    def resolve(self, project_root: Path | None = None) -> BuildSettings:
        """Resolve relative paths into an immutable ``BuildSettings``.

        Args:
            project_root: Explicit root overriding both the configured one and
                auto-detection.

        Returns:
            BuildSettings: Absolute locations for the build pass.
        """
        root = (project_root or self.project_root or detect_project_root()).expanduser().resolve()

        def _absolute(value: Path | None, fallback: Path) -> Path:
            candidate = value if value is not None else fallback
            candidate = candidate.expanduser()
            if not candidate.is_absolute():
                candidate = root / candidate
            return candidate.resolve()

        def _optional(value: Path | None) -> Path | None:
            return _absolute(value, value) if value is not None else None

        generated_root = _absolute(self.generated_root, Path(DEFAULT_GENERATED_DIR))
        bundled = bundled_template_dir()

        return BuildSettings(
            project_root=root,
            effects_root=_absolute(self.effects_root, Path(DEFAULT_EFFECTS_DIR)),
            generated_root=generated_root,
            cache_file=_absolute(self.cache_file, generated_root / CACHE_FILE_NAME),
            template_path=_absolute(self.template_path, bundled / TEMPLATE_FILE_NAME),
            core_library_path=_absolute(self.core_library_path, bundled / CORE_LIBRARY_FILE_NAME),
            thumbnail_width=self.thumbnail_width,
            default_scan_texture=_optional(self.default_scan_texture),
            default_depth_texture=_optional(self.default_depth_texture),
            compile_command=tuple(self.compile_command) if self.compile_command else None,
            thumbnail_command=tuple(self.thumbnail_command) if self.thumbnail_command else None,
        )

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = value.as_posix()

        target = path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise ConfigError(f"Failed to save configuration to {target}: {e}") from e
        logger.info("Configuration saved to %s", target)
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# glowc configuration file")
        lines.append("# Relative paths resolve against project_root (defaults to the detected project).")
        lines.append("")

        lines.append("# Project root (optional)")
        if config["project_root"] is not None:
            lines.append(f"project_root = {self._format_toml_value(config['project_root'])}")
        lines.append("")

        lines.append("# Source and output locations")
        for key in ("effects_root", "generated_root"):
            if config[key] is not None:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
        lines.append("# Cache file (defaults to <generated_root>/.glowcache.json)")
        if config["cache_file"] is not None:
            lines.append(f"cache_file = {self._format_toml_value(config['cache_file'])}")
        lines.append("")

        lines.append("# Template and shared library (default to the bundled files)")
        for key in ("template_path", "core_library_path"):
            if config[key] is not None:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
        lines.append("")

        lines.append("# External compile step; {output} is replaced with the generated shader path")
        lines.append('# Example: compile_command = ["dxc", "-T", "ps_6_0", "{output}"]')
        if config["compile_command"]:
            lines.append(f"compile_command = {self._format_toml_value(config['compile_command'])}")
        lines.append("")

        lines.append("# Thumbnail rendering")
        lines.append(
            "# Placeholders: {program} {scan} {depth} {width} {output}"
        )
        if config["thumbnail_command"]:
            lines.append(
                f"thumbnail_command = {self._format_toml_value(config['thumbnail_command'])}"
            )
        for key in ("default_scan_texture", "default_depth_texture"):
            if config[key] is not None:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
        lines.append(f"thumbnail_width = {self._format_toml_value(config['thumbnail_width'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._format_toml_value(item) for item in value) + "]"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file.

        A commented default file is written when none exists yet.

        Args:
            path: Explicit config file. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigError: If the file is not valid TOML or holds invalid values.
        """
        config_file = path or default_config_path()

        if not config_file.exists():
            config = cls()
            try:
                _ = config.save(config_file)
            except ConfigError:
                logger.warning("Using built-in defaults; could not create %s", config_file)
                return config
            logger.info("Created default configuration at %s", config_file)
            return config

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise ConfigError(f"Failed to load configuration from {config_file}: {e}") from e

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys in {config_file}: {', '.join(unknown)}"
            )

        instance = cls(**config_dict)
        logger.debug("Configuration loaded from %s", config_file)
        return instance


__all__ = ["BuildSettings", "Config", "ConfigError"]
