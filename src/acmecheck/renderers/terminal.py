"""
Terminal renderer using Rich.

Outputs color-coded scan reports to the terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from acmecheck.domain.models import Severity

if TYPE_CHECKING:
    from acmecheck.domain.models import Problem
    from acmecheck.domain.report import ScanReport


class TerminalRenderer:
    """
    Renders scan reports to the terminal using Rich.

    Shows a summary table, then each problem with its explanation and
    optional detail.
    """

    SEVERITY_COLORS = {
        Severity.FATAL: "red bold",
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.DEBUG: "dim",
    }

    def __init__(
        self,
        console: Console | None = None,
        show_detail: bool = True,
        show_debug: bool = False,
    ) -> None:
        """
        Initialize the terminal renderer.

        Args:
            console: Rich console to use (creates new one if None).
            show_detail: Whether to show problem details.
            show_debug: Whether to show Debug problems.
        """
        self.console = console or Console()
        self.show_detail = show_detail
        self.show_debug = show_debug

    def render(self, report: ScanReport) -> None:
        """
        Render a scan report to the terminal.

        Args:
            report: The scan report to render.
        """
        self._render_header(report)

        if report.error is not None:
            self.console.print(f"\n[red bold]✗ The diagnosis could not be completed:[/] {report.error}\n")
            if report.problems:
                self.console.print("[dim]Problems found before the failure:[/dim]")

        self._render_summary(report)

        problems = [
            p for p in report.problems if self.show_debug or p.severity != Severity.DEBUG
        ]
        if problems:
            self.console.print()
            for problem in problems:
                self._render_problem(problem)
        elif report.error is None:
            self.console.print("\n[green]✓ No problems found![/green]\n")

        self._render_footer(report)

    def _render_header(self, report: ScanReport) -> None:
        """Render the report header."""
        self.console.print()
        self.console.print(
            Panel(
                f"[bold]ACME readiness check[/bold]\n"
                f"Domain: [cyan]{report.domain}[/cyan]  Method: [cyan]{report.method}[/cyan]\n"
                f"Scan ID: [dim]{report.scan_id}[/dim]",
                title="acmecheck",
                border_style="blue",
            )
        )

    def _render_summary(self, report: ScanReport) -> None:
        """Render the summary statistics."""
        summary = report.summary
        if summary.total == 0:
            return

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Severity", style="bold")
        table.add_column("Count", justify="right")

        for severity, count in (
            (Severity.FATAL, summary.fatal),
            (Severity.ERROR, summary.error),
            (Severity.WARNING, summary.warning),
            (Severity.DEBUG, summary.debug),
        ):
            if count > 0:
                style = self.SEVERITY_COLORS[severity]
                table.add_row(Text(severity.value.upper(), style=style), Text(str(count), style=style))

        self.console.print()
        self.console.print(table)

    def _render_problem(self, problem: Problem) -> None:
        """Render a single problem."""
        color = self.SEVERITY_COLORS[problem.severity]
        self.console.print(f"[{color}]{problem.severity.value.upper()}[/] [bold]{problem.name}[/bold]")
        self.console.print(f"  {problem.explanation}")
        if self.show_detail and problem.detail:
            for line in problem.detail.splitlines():
                self.console.print(f"    [dim]{line}[/dim]", highlight=False)
        self.console.print()

    def _render_footer(self, report: ScanReport) -> None:
        """Render the report footer."""
        if report.error is not None:
            status = "[red]✗ FAILED TO CHECK[/red]"
        elif report.passed:
            status = "[green]✓ PASSED[/green]"
        else:
            status = "[red]✗ PROBLEMS FOUND[/red]"

        self.console.print(f"Status: {status} | Duration: {report.duration_ms:.1f}ms")
        self.console.print()
