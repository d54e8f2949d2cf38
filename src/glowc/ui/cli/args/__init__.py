"""Command line argument handling package."""

from glowc.ui.cli.args.parser import ArgumentParser
from glowc.ui.cli.args.options import CheckArgs, CLIArgs, CompileArgs, MapLineArgs

__all__ = ["ArgumentParser", "CLIArgs", "CheckArgs", "CompileArgs", "MapLineArgs"]
