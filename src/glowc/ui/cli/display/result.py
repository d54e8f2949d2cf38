"""src/glowc/ui/cli/display/result.py
What: Render user-facing output for compile, check and map-line flows.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.markup import escape

from glowc.application.services.compile_service import LineMapping, SourceCheck
from glowc.features.build import BuildReport
from glowc.features.templating import NOT_MAPPABLE

from .summary import render_build_summary


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize result display."""
        self.console = console or Console()

    def show_report(self, report: BuildReport, quiet: bool = False) -> None:
        """Display a build pass report.

        Args:
            report: Pass report to display.
            quiet: Whether to suppress non-error output.
        """
        if quiet and report.succeeded:
            return
        render_build_summary(self.console, report)

    def show_checks(self, checks: Sequence[SourceCheck], quiet: bool = False) -> None:
        """Display validation results for every source."""

        failures = [check for check in checks if not check.ok]
        if quiet and not failures:
            return

        self.console.print("\n[bold]Check Summary:[/bold]")
        self.console.print(f"Effects checked: {len(checks)}")
        self.console.print(f"[green]Valid: {len(checks) - len(failures)}[/green]")
        if not failures:
            return
        self.console.print(f"[red]Invalid: {len(failures)}[/red]")
        for check in failures:
            self.console.print(f"[red]  • {escape(check.logical_path)}: {escape(check.reason or '')}[/red]")

    def show_mapping(self, mapping: LineMapping) -> None:
        """Print the translated line, or explain why there is none."""

        if mapping.source_line == NOT_MAPPABLE:
            self.console.print(
                f"Line {mapping.output_line} is template boilerplate and has no source line (0)"
            )
            return
        self.console.print(f"{mapping.source_path}:{mapping.source_line}")
