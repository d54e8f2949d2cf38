"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from glowc.config import BuildSettings, Config
from glowc.config.paths import default_config_path, default_log_file, detect_project_root
from glowc.platform.logging import logger, setup_logger
from glowc.ui.cli.args.options import CheckArgs, CLIArgs, CompileArgs, MapLineArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="glowc",
            description="glowc - expand glow effect snippets into shaders and rebuild only what changed.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        compile_parser = subparsers.add_parser(
            "compile",
            help="Generate and import every stale effect",
        )
        ArgumentParser._configure_common_arguments(compile_parser)

        check_parser = subparsers.add_parser(
            "check",
            help="Validate effect sources without writing anything",
        )
        ArgumentParser._configure_common_arguments(check_parser)

        map_parser = subparsers.add_parser(
            "map-line",
            help="Translate a generated shader line back to its effect source line",
        )
        _ = map_parser.add_argument(
            "source",
            type=str,
            help="Effect source file (.glow)",
            metavar="SOURCE",
        )
        _ = map_parser.add_argument(
            "line",
            type=int,
            help="1-based line number in the generated shader",
            metavar="LINE",
        )
        ArgumentParser._configure_common_arguments(map_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            ConfigError: If the configuration file is unreadable or invalid.
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        explicit_root = Path(parsed_args.project_root) if parsed_args.project_root else None
        if explicit_root is not None and not explicit_root.is_dir():
            logger.error("Project root does not exist or is not a directory: %s", explicit_root)
            sys.exit(1)
        project_root = (explicit_root or detect_project_root()).resolve()

        config_path = (
            Path(parsed_args.config) if parsed_args.config else default_config_path(project_root)
        )
        configuration = Config.load(config_path)
        settings = configuration.resolve(explicit_root)
        log_file_path = configuration.log_file or default_log_file(settings.project_root)
        if not log_file_path.is_absolute():
            log_file_path = settings.project_root / log_file_path
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "compile":
            return CompileArgs(
                command="compile",
                settings=settings,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "check":
            return CheckArgs(
                command="check",
                settings=settings,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "map-line":
            return ArgumentParser._process_map_line(parsed_args, settings, is_verbose, is_quiet)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _configure_common_arguments(parser: argparse.ArgumentParser) -> None:
        """Apply the options every subcommand accepts."""

        _ = parser.add_argument(
            "--project-root",
            type=str,
            help="Project root relative paths resolve against (defaults to auto-detection)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            help="Configuration file (defaults to <project_root>/config/glowc.toml)",
            metavar="FILE",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed build information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _process_map_line(
        parsed_args: argparse.Namespace,
        settings: BuildSettings,
        verbose: bool,
        quiet: bool,
    ) -> MapLineArgs:
        source_path = Path(parsed_args.source)
        if not source_path.is_absolute():
            candidate = settings.project_root / source_path
            source_path = candidate if candidate.exists() else source_path.resolve()
        if not source_path.is_file():
            logger.error("Effect source does not exist: %s", source_path)
            sys.exit(1)

        output_line: int = parsed_args.line
        if output_line <= 0:
            logger.error("Line must be a positive integer; received %s", output_line)
            sys.exit(1)

        return MapLineArgs(
            command="map-line",
            settings=settings,
            source_path=source_path,
            output_line=output_line,
            verbose=verbose,
            quiet=quiet,
        )
