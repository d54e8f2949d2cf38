"""glowc: expand simplified glow effect snippets into full shader programs."""

__version__ = "0.1.0"

__all__ = ["__version__"]
