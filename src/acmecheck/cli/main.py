"""
Main CLI entry point for acmecheck.

Usage:
    acmecheck check example.com
    acmecheck check "*.example.com" --method dns-01 --format json
    acmecheck checkers
    acmecheck methods
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from acmecheck import __version__

app = typer.Typer(
    name="acmecheck",
    help="acmecheck — ACME challenge readiness diagnostics",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    terminal = "terminal"
    json = "json"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"acmecheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    acmecheck — ACME challenge readiness diagnostics

    Find out why a certificate cannot be issued for a domain before the
    certificate authority tells you.

    Examples:

        acmecheck check example.com

        acmecheck check "*.example.com" --method dns-01
    """


@app.command()
def check(
    domain: Annotated[
        str,
        typer.Argument(help="Domain name to diagnose, e.g. example.com or *.example.com."),
    ],
    method: Annotated[
        str,
        typer.Option(
            "--method",
            "-m",
            help="Validation method: http-01, dns-01, tls-sni-01 or tls-sni-02.",
        ),
    ] = "http-01",
    format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
        ),
    ] = OutputFormat.terminal,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file path (default: stdout).",
        ),
    ] = None,
    show_debug: Annotated[
        bool,
        typer.Option(
            "--show-debug",
            help="Show Debug-level problems.",
        ),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option(
            "--no-color",
            help="Disable colored output.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log checker activity to stderr.",
        ),
    ] = False,
) -> None:
    """
    Diagnose a domain for one validation method.

    Exits 0 when nothing blocks issuance, 1 when blocking problems were
    found and 2 when the diagnosis itself failed.

    Examples:

        acmecheck check example.com

        acmecheck check example.com --format json --output report.json
    """
    from acmecheck.config import load_settings
    from acmecheck.domain.exceptions import AcmeCheckError
    from acmecheck.engine.scanner import diagnose
    from acmecheck.logging_config import setup_logging

    try:
        settings = load_settings()
    except AcmeCheckError as e:
        err_console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(2)

    setup_logging("DEBUG" if verbose else settings.log_level, use_colors=not no_color)

    try:
        report = diagnose(domain, method, settings=settings)
    except AcmeCheckError as e:
        err_console.print(f"[red]Error diagnosing {domain}: {e.message}[/red]")
        raise typer.Exit(2)

    match format:
        case OutputFormat.terminal:
            from acmecheck.renderers.terminal import TerminalRenderer

            renderer = TerminalRenderer(
                console=Console(no_color=no_color),
                show_debug=show_debug,
            )
            renderer.render(report)

        case OutputFormat.json:
            from acmecheck.renderers.json_renderer import JsonRenderer

            json_output = JsonRenderer().render(report)
            if output:
                output.write_text(json_output, encoding="utf-8")
                console.print(f"[green]Report written to {output}[/green]")
            else:
                typer.echo(json_output)

    if report.exit_code:
        raise typer.Exit(report.exit_code)


@app.command()
def checkers() -> None:
    """
    List the checkers of the default pipeline in the order they run.
    """
    from rich.table import Table

    from acmecheck.engine.group import ConcurrentCheckerGroup
    from acmecheck.engine.pipeline import build_default_pipeline

    pipeline = build_default_pipeline()

    table = Table(title="acmecheck pipeline")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Checker", style="cyan")
    table.add_column("Description", style="white")

    count = 0
    for step, entry in enumerate(pipeline, 1):
        if isinstance(entry, ConcurrentCheckerGroup):
            for member in entry:
                table.add_row(
                    f"{step}",
                    f"{member.name} [dim](concurrent)[/dim]",
                    getattr(member, "description", ""),
                )
                count += 1
        else:
            table.add_row(f"{step}", entry.name, getattr(entry, "description", ""))
            count += 1

    console.print(table)
    console.print(f"\nTotal: {count} checkers")


@app.command()
def methods() -> None:
    """
    List the validation methods acmecheck knows and whether they can be used.
    """
    from acmecheck.checkers.gates import TlsSniDisabledChecker
    from acmecheck.domain.models import ValidationMethod

    for method in ValidationMethod:
        if method.value in TlsSniDisabledChecker.DISABLED:
            console.print(f"  {method.value:<12} [red]known, no longer allowed[/red]")
        else:
            console.print(f"  {method.value:<12} [green]allowed[/green]")


if __name__ == "__main__":
    app()
