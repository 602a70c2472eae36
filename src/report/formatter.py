"""Report formatting utilities."""
from __future__ import annotations

import json
from typing import Literal

from rich.markup import escape

OutputFormat = Literal["cli", "json", "markdown"]

_SECTION_TITLES = {
    "crawlability": "Crawlability",
    "on_page": "On-page SEO",
    "ai_llm": "AI/LLM readiness",
    "security": "Security headers",
}

_POINTS = {"pass": 100, "warn": 50, "fail": 0}


def format_report(report: dict, output: OutputFormat = "cli") -> str:
    """Format an audit report for output.

    Args:
        report: Report dict as produced by ``AuditReport.to_dict()``
        output: Output format - 'cli', 'json', or 'markdown'

    Returns:
        Formatted string representation of the report
    """
    if output == "json":
        return _format_json(report)
    elif output == "markdown":
        return _format_markdown(report)
    else:
        return _format_cli(report)


def _format_json(report: dict) -> str:
    """Format report as JSON."""
    return json.dumps(report, ensure_ascii=False, indent=2)


def _section_percentage(checks: dict) -> int:
    points = [_POINTS.get(check.get("status"), 0) for check in checks.values()]
    return int(sum(points) / len(points) + 0.5)


def _format_cli(report: dict) -> str:
    """Format report for terminal display with Rich-compatible markup."""
    lines = []
    domain = report.get("domain", "")

    lines.append("[bold cyan]SEO Audit Report[/bold cyan]")
    if report.get("error"):
        lines.append(f"[red]Error:[/red] {escape(report['error'])}")
        return "\n".join(lines)

    lines.append(f"[dim]Domain:[/dim] {escape(domain)}")
    lines.append("")

    score = report.get("score", 0)
    grade = report.get("grade", "F")
    grade_colors = {"A": "green", "B": "blue", "C": "yellow", "D": "red", "F": "red bold"}
    grade_color = grade_colors.get(grade, "white")
    lines.append(f"[bold]Score:[/bold] [{grade_color}]{score}/100 ({grade})[/{grade_color}]")
    lines.append("")

    status_display = {
        "pass": "[green]✓[/green]",
        "warn": "[yellow]![/yellow]",
        "fail": "[red]✗[/red]",
    }

    for name, checks in report.get("sections", {}).items():
        if not checks:
            continue
        percentage = _section_percentage(checks)

        bar_width = 20
        filled = int(bar_width * percentage / 100)
        bar = "█" * filled + "░" * (bar_width - filled)
        if percentage >= 75:
            bar_color = "green"
        elif percentage >= 50:
            bar_color = "yellow"
        else:
            bar_color = "red"

        title = _SECTION_TITLES.get(name, name)
        lines.append(f"[bold]{title:20}[/bold] [{bar_color}]{bar}[/{bar_color}] {percentage}%")
        for check in checks.values():
            mark = status_display.get(check.get("status"), "?")
            label = escape(str(check.get("label", "")))
            value = escape(str(check.get("value", "")))
            lines.append(f"  {mark} {label:28} [dim]{value}[/dim]")
        lines.append("")

    recommendations = report.get("recommendations", [])
    if recommendations:
        lines.append("[bold]Recommendations:[/bold]")
        for i, tip in enumerate(recommendations, 1):
            lines.append(f"  {i}. {escape(tip)}")

    return "\n".join(lines)


def _format_markdown(report: dict) -> str:
    """Format report as Markdown."""
    lines = []
    domain = report.get("domain", "")

    lines.append("# SEO Audit Report")
    lines.append("")
    if report.get("error"):
        lines.append(f"**Error:** {report['error']}")
        return "\n".join(lines)

    lines.append(f"**Domain:** {domain}")
    lines.append("")
    lines.append(f"**Score:** {report.get('score', 0)}/100 ({report.get('grade', 'F')})")
    lines.append("")

    emoji = {"pass": "✅", "warn": "⚠️", "fail": "❌"}

    for name, checks in report.get("sections", {}).items():
        if not checks:
            continue
        title = _SECTION_TITLES.get(name, name)
        lines.append(f"## {title} ({_section_percentage(checks)}%)")
        lines.append("")
        lines.append("| Check | Status | Value |")
        lines.append("|-------|--------|-------|")
        for check in checks.values():
            status = check.get("status", "")
            value = str(check.get("value", "")).replace("|", "\\|")
            lines.append(f"| {check.get('label', '')} | {emoji.get(status, '')} {status} | {value} |")
        lines.append("")

    recommendations = report.get("recommendations", [])
    if recommendations:
        lines.append("## Recommendations")
        lines.append("")
        for i, tip in enumerate(recommendations, 1):
            lines.append(f"{i}. {tip}")
        lines.append("")

    return "\n".join(lines)
