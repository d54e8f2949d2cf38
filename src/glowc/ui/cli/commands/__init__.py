"""Command execution package for CLI."""

from glowc.ui.cli.commands.executor import CommandExecutor
from glowc.ui.cli.commands.check import CheckCommand
from glowc.ui.cli.commands.compile import CompileCommand
from glowc.ui.cli.commands.map_line import MapLineCommand

__all__ = [
    "CheckCommand",
    "CommandExecutor",
    "CompileCommand",
    "MapLineCommand",
]
