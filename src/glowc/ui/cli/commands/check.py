"""Validate effect sources from the CLI without touching outputs or the cache."""

from typing import override

from glowc.ui.cli.commands.executor import CommandExecutor


class CheckCommand(CommandExecutor):
    """Command validating every discovered effect source."""

    @override
    def execute(self) -> int:
        checks = self.app.validate_sources(self.request)
        self.result_display.show_checks(checks, quiet=self.args.quiet)
        return 0 if all(check.ok for check in checks) else 1
