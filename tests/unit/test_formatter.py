"""Unit tests for report rendering."""
from __future__ import annotations

import json

import pytest

from src.audit.base import AuditReport
from src.audit.engine import CheckEngine
from src.audit.scoring import build_recommendations, compute_score, score_to_grade
from src.report.formatter import format_report


def _report(bundle, domain: str = "example.com") -> dict:
    sections = CheckEngine().evaluate(bundle)
    score = compute_score(sections)
    return AuditReport(
        domain=domain,
        score=score,
        grade=score_to_grade(score),
        sections=sections,
        recommendations=build_recommendations(sections),
    ).to_dict()


@pytest.fixture
def healthy_report(healthy_bundle) -> dict:
    return _report(healthy_bundle)


@pytest.fixture
def degraded_report(make_bundle) -> dict:
    return _report(make_bundle(home_body="<html><title>Tiny</title></html>", effective_url="http://example.com/"))


class TestJsonOutput:
    """Tests for JSON rendering."""

    def test_round_trips(self, healthy_report):
        assert json.loads(format_report(healthy_report, "json")) == healthy_report

    def test_non_ascii_is_kept(self, make_bundle):
        report = _report(make_bundle())
        assert "—" in format_report(report, "json")


class TestMarkdownOutput:
    """Tests for Markdown rendering."""

    def test_structure(self, healthy_report):
        rendered = format_report(healthy_report, "markdown")
        assert rendered.startswith("# SEO Audit Report")
        assert "**Score:** 100/100 (A)" in rendered
        assert "## Crawlability (100%)" in rendered
        assert "## On-page SEO (100%)" in rendered
        assert "| llms.txt | ✅ pass | Valid |" in rendered
        assert "## Recommendations" not in rendered

    def test_section_percentage_and_recommendations(self, degraded_report):
        rendered = format_report(degraded_report, "markdown")
        # https fail, robots warn, sitemap fail, response time pass -> 37.5 -> 38
        assert "## Crawlability (38%)" in rendered
        assert "## Recommendations" in rendered
        assert "1. HTTPS active: Enable HTTPS and redirect HTTP to HTTPS." in rendered

    def test_pipes_in_values_are_escaped(self, make_bundle):
        html = "<html><head><title>Home | Example Site Documentation Pages</title></head></html>"
        rendered = format_report(_report(make_bundle(home_body=html)), "markdown")
        assert "Home \\| Example Site Documentation Pages" in rendered

    def test_error_report(self):
        rendered = format_report(AuditReport.input_error("Please enter a domain.").to_dict(), "markdown")
        assert "**Error:** Please enter a domain." in rendered
        assert "Score" not in rendered


class TestCliOutput:
    """Tests for terminal rendering."""

    def test_structure(self, healthy_report):
        rendered = format_report(healthy_report)
        assert "SEO Audit Report" in rendered
        assert "100/100 (A)" in rendered
        assert "AI/LLM readiness" in rendered
        assert "100%" in rendered

    def test_markup_in_page_content_is_escaped(self, make_bundle):
        html = "<html><head><title>[bold]Injected[/bold] title for markup escaping</title></head></html>"
        rendered = format_report(_report(make_bundle(home_body=html)), "cli")
        assert "\\[bold]Injected\\[/bold]" in rendered

    def test_error_report(self):
        rendered = format_report(AuditReport.input_error("Please enter a domain.").to_dict(), "cli")
        assert "Error:" in rendered
        assert "Score" not in rendered

    def test_empty_sections_are_skipped(self, healthy_report):
        healthy_report["sections"]["security"] = {}
        assert "Security headers" not in format_report(healthy_report)
