"""Command line interface for glowc."""

import sys
from typing import final

from glowc.config import ConfigError
from glowc.platform.logging import logger
from glowc.ui.cli.args import ArgumentParser
from glowc.ui.cli.args.options import CheckArgs, CLIArgs, CompileArgs, MapLineArgs
from glowc.ui.cli.commands import CheckCommand, CommandExecutor, CompileCommand, MapLineCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            exit_code = CommandProcessor._build_command(args).execute()
            if exit_code != 0:
                sys.exit(exit_code)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except ConfigError as e:
            logger.error("Configuration error: %s", str(e))
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)

    @staticmethod
    def _build_command(args: CLIArgs) -> CommandExecutor:
        if isinstance(args, CompileArgs):
            return CompileCommand(args)
        if isinstance(args, CheckArgs):
            return CheckCommand(args)
        assert isinstance(args, MapLineArgs)
        return MapLineCommand(args)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)``, so this return is only reached on success.
    """
    CommandProcessor.process_command()
    return 0
