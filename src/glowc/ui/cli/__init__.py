"""Command line interface entry points."""

from glowc.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
