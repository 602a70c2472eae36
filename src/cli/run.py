"""CLI commands."""
from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from src.audit.runner import normalize_domain, run_audit
from src.config.settings import settings
from src.report.formatter import OutputFormat, format_report

VERSION = "1.0.0"

app = typer.Typer(
    add_completion=False,
    help="SEO Audit - Crawlability, on-page SEO, AI/LLM readiness and security headers",
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose or settings.debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _validate_domain(domain: str) -> None:
    max_length = settings.api.max_domain_length
    if len(normalize_domain(domain)) > max_length:
        console.print(f"[red]Error:[/red] Domain is longer than {max_length} characters.")
        raise typer.Exit(1)


@app.command()
def run(
    domain: str = typer.Argument(..., help="Domain to audit (with or without https://)"),
    output: str = typer.Option(
        "cli",
        "--output",
        "-o",
        help="Output format: cli, json, markdown",
    ),
    save: str | None = typer.Option(
        None,
        "--save",
        "-s",
        help="Save report to file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every fetch and check step",
    ),
) -> None:
    """Run the full SEO and AI-readiness audit for a domain.

    Examples:
        seo-audit run example.com
        seo-audit run https://example.com -o json
        seo-audit run example.com -o markdown -s report.md
    """
    if output not in ("cli", "json", "markdown"):
        console.print(f"[red]Error:[/red] Invalid output format '{output}'. Use cli, json, or markdown.")
        raise typer.Exit(1)

    output_format: OutputFormat = output  # type: ignore
    _configure_logging(verbose)
    _validate_domain(domain)

    console.print(Panel.fit(
        f"[bold cyan]SEO Audit[/bold cyan]\n[dim]Auditing:[/dim] {normalize_domain(domain) or '-'}",
        border_style="cyan",
    ))

    with console.status("[bold blue]Fetching site resources...", spinner="dots"):
        report = run_audit(domain).to_dict()

    rendered = format_report(report, output_format)

    if save:
        save_path = Path(save)
        save_path.write_text(rendered, encoding="utf-8")
        console.print(f"\n[green]Report saved to:[/green] {save_path}")
    else:
        console.print("")
        if output_format == "cli":
            console.print(rendered)
        else:
            console.print(rendered, markup=False)

    if report["error"] or report["grade"] in ("D", "F"):
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]SEO Audit[/bold] v{VERSION}")
    console.print("[dim]Crawlability, on-page SEO, AI/LLM readiness and security header audit[/dim]")


@app.command()
def check(
    domain: str = typer.Argument(..., help="Domain to quick-check"),
) -> None:
    """Quick check - returns only the score and grade.

    Example:
        seo-audit check example.com
    """
    _validate_domain(domain)

    with console.status("[bold blue]Auditing...", spinner="dots"):
        report = run_audit(domain)

    if report.error:
        console.print(f"[red]Error:[/red] {report.error}")
        raise typer.Exit(1)

    grade_colors = {"A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red"}
    color = grade_colors.get(report.grade, "white")

    console.print(f"[{color}]{report.grade}[/{color}] ({report.score}/100) - {report.domain}")

    if report.grade in ("D", "F"):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
