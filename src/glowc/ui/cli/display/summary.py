"""Utilities for rendering shared CLI display content."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from glowc.features.build import BuildReport


def render_build_summary(console: Console, report: BuildReport, header_label: str = "Build Summary") -> None:
    """Render counts for one build pass followed by itemised failures.

    Args:
        console: Rich console instance used to render output.
        report: Pass report to summarize.
        header_label: Label rendered in the summary header.
    """
    console.print(f"\n[bold]{header_label}:[/bold]")

    if report.fatal is not None:
        console.print(f"[red]Aborted: {escape(report.fatal.reason)}[/red]")
        return

    console.print(f"Effects found: {report.total}")
    console.print(f"[green]Compiled: {report.compiled}[/green]")
    console.print(f"Up to date: {report.up_to_date}")
    if report.degraded:
        console.print(f"[yellow]Without thumbnail: {report.degraded}[/yellow]")
    if report.cancelled:
        remaining = report.total - len(report.results)
        console.print(f"[yellow]Cancelled with {remaining} effect(s) not processed[/yellow]")
    if report.cache_warning is not None:
        console.print(f"[yellow]Cache not saved: {escape(report.cache_warning.reason)}[/yellow]")

    failures = [result for result in report.results if result.failed]
    if not failures:
        return

    console.print(f"[red]Failed: {len(failures)}[/red]")
    for result in failures:
        reason = result.failure.reason if result.failure is not None else "unknown error"
        console.print(f"[red]  • {escape(result.logical_path)}: {escape(reason)}[/red]")
        for diagnostic in result.diagnostics:
            console.print(f"[red]      {escape(diagnostic.format(result.logical_path))}[/red]")
