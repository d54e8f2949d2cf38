"""Configuration loading, path policy and compiler constants."""

from .config import BuildSettings, Config, ConfigError

__all__ = ["BuildSettings", "Config", "ConfigError"]
