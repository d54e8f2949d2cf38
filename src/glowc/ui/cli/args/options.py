"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from glowc.config import BuildSettings


@final
@dataclass(slots=True)
class CompileArgs:
    """Command line arguments for the ``compile`` subcommand."""

    command: Literal["compile"]
    settings: BuildSettings
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class CheckArgs:
    """Command line arguments for the ``check`` subcommand."""

    command: Literal["check"]
    settings: BuildSettings
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class MapLineArgs:
    """Command line arguments for the ``map-line`` subcommand."""

    command: Literal["map-line"]
    settings: BuildSettings
    source_path: Path
    output_line: int
    verbose: bool
    quiet: bool


CLIArgs = CompileArgs | CheckArgs | MapLineArgs

__all__ = ["CLIArgs", "CheckArgs", "CompileArgs", "MapLineArgs"]
