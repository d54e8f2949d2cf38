"""src/glowc/ui/cli/commands/compile.py
What: Run an incremental build pass from the CLI.
Why: Bridge parsed arguments with the compile service, honouring Ctrl-C between effects.
"""

import signal
from types import FrameType
from typing import override

from glowc.platform.logging import logger
from glowc.ui.cli.commands.executor import CommandExecutor

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130


class CancellationFlag:
    """Set by the first SIGINT; a second SIGINT interrupts immediately."""

    def __init__(self) -> None:
        self.requested = False

    def __call__(self) -> bool:
        return self.requested

    def handle_signal(self, signum: int, frame: FrameType | None) -> None:
        _ = frame
        self.requested = True
        logger.warning("Cancellation requested; stopping after the current effect")
        _ = signal.signal(signum, signal.default_int_handler)


class CompileCommand(CommandExecutor):
    """Command compiling every stale effect."""

    @override
    def execute(self) -> int:
        """Run the pass and display its report.

        Returns:
            0 on success, 130 when cancelled, 1 otherwise.
        """
        flag = CancellationFlag()
        previous = signal.signal(signal.SIGINT, flag.handle_signal)
        try:
            report = self.progress_display.run_with_service(self.app, self.request, should_cancel=flag)
        finally:
            _ = signal.signal(signal.SIGINT, previous)

        self.result_display.show_report(report, quiet=self.args.quiet)
        if report.cancelled:
            return EXIT_CANCELLED
        return EXIT_OK if report.succeeded else EXIT_FAILURE
