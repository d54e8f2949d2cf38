"""Progress display functionality for CLI."""

from pathlib import Path
from typing import Any, Callable, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from glowc.application.services.compile_service import CompileRequest
from glowc.features.build import BuildReport
from glowc.platform.logging import BuildEventRichHandler, logger


@runtime_checkable
class CompileServiceLike(Protocol):
    """Protocol for application services that can run a build pass with progress."""

    def compile_all(
        self,
        request: CompileRequest,
        *,
        should_cancel: Callable[[], bool] | None = None,
        progress_callback: Callable[[int, int, Path], None] | None = None,
    ) -> BuildReport:
        ...


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run_with_service(
        self,
        app: CompileServiceLike,
        request: CompileRequest,
        should_cancel: Callable[[], bool] | None = None,
    ) -> BuildReport:
        """Run a build pass via the application service with a progress bar.

        Args:
            app: Application service instance used to orchestrate the pass.
            request: Compile operation parameters.
            should_cancel: Checked between effects.

        Returns:
            The pass report.
        """
        progress_console: Console | None = None
        for handler in logger.handlers:
            if isinstance(handler, BuildEventRichHandler):
                progress_console = handler.console
                break

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        with Progress(**progress_kwargs) as progress:
            task_id: TaskID | None = None
            last_count = 0

            def _cb(done: int, total: int, current_file: Path) -> None:
                nonlocal task_id, last_count
                if task_id is None:
                    task_id = progress.add_task("[cyan]Compiling effects...", total=total)
                advance = max(done - last_count, 0)
                _ = progress.update(
                    task_id,
                    advance=advance,
                    description=f"[cyan]Compiling effects... {done}/{total} {current_file.name}",
                )
                last_count = done

            return app.compile_all(request, should_cancel=should_cancel, progress_callback=_cb)
