"""src/glowc/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse the application service and presentation helpers across commands.
"""

from abc import ABC, abstractmethod

from glowc.application.services.compile_service import CompileEffectsService, CompileRequest
from glowc.ui.cli.args.options import CLIArgs
from glowc.ui.cli.display.progress import ProgressDisplay
from glowc.ui.cli.display.result import ResultDisplay


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: CLIArgs
    app: CompileEffectsService
    request: CompileRequest
    progress_display: ProgressDisplay
    result_display: ResultDisplay

    def __init__(self, args: CLIArgs, app: CompileEffectsService | None = None) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            app: Application service; a default one is built when omitted.
        """
        self.args = args
        self.app = app or CompileEffectsService()
        self.request = CompileRequest(settings=args.settings)
        self.progress_display = ProgressDisplay()
        self.result_display = ResultDisplay()

    @abstractmethod
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Process exit code.
        """
        pass
