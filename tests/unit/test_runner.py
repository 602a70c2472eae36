"""Unit tests for the audit entry point."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from src.audit.runner import EMPTY_DOMAIN_MESSAGE, normalize_domain, run_audit
from src.config.settings import Settings


class TestNormalizeDomain:
    """Tests for domain normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com", "example.com"),
            ("  Example.COM  ", "example.com"),
            ("https://example.com", "example.com"),
            ("HTTP://example.com/", "example.com"),
            ("https://example.com/about/team/", "example.com"),
            ("example.com:8443/path", "example.com:8443"),
            ("sub.example.co.uk", "sub.example.co.uk"),
        ],
    )
    def test_normalization(self, raw, expected):
        assert normalize_domain(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "https://", "///"])
    def test_empty_results(self, raw):
        assert normalize_domain(raw) == ""


class TestRunAudit:
    """Tests for run_audit with the network patched out."""

    @pytest.mark.parametrize("domain", ["", "   ", "https://"])
    def test_empty_domain_is_input_error(self, domain):
        with patch("src.audit.runner.fetch_all") as mock_fetch:
            report = run_audit(domain)

        mock_fetch.assert_not_called()
        assert report.to_dict() == {
            "domain": "",
            "error": EMPTY_DOMAIN_MESSAGE,
            "score": 0,
            "grade": "F",
            "sections": {},
            "recommendations": [],
        }

    def test_healthy_site(self, healthy_bundle):
        config = Settings()
        with patch("src.audit.runner.fetch_all", return_value=healthy_bundle) as mock_fetch:
            report = run_audit("HTTPS://Example.com/", config)

        mock_fetch.assert_called_once_with("https://example.com", config.fetcher)
        assert report.domain == "example.com"
        assert report.error is None
        assert report.score == 100
        assert report.grade == "A"
        assert report.recommendations == []

    def test_unreachable_site_still_reports(self, make_bundle):
        bundle = make_bundle(effective_url=None, ttfb_ms=None)
        with patch("src.audit.runner.fetch_all", return_value=bundle):
            report = run_audit("unreachable.example")

        data = report.to_dict()
        assert data["error"] is None
        assert data["grade"] in ("D", "F")
        assert set(data["sections"]) == {"crawlability", "on_page", "ai_llm", "security"}
        assert data["sections"]["crawlability"]["response_time"]["value"] == "Unknown"
        assert len(data["recommendations"]) == 10

    def test_report_dict_is_serializable(self, healthy_bundle):
        import json

        with patch("src.audit.runner.fetch_all", return_value=healthy_bundle):
            data = run_audit("example.com").to_dict()

        decoded = json.loads(json.dumps(data))
        assert list(decoded) == ["domain", "error", "score", "grade", "sections", "recommendations"]
        assert decoded["sections"]["ai_llm"]["llms_txt"] == {
            "status": "pass",
            "label": "llms.txt",
            "value": "Valid",
            "fix": None,
        }
