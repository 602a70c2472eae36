"""
Audit Score Regression Tests.

These tests pin the score, grade and leading recommendations for a few
representative sites. If a test fails, the scoring behaviour has changed:
update the golden values if that was intended, otherwise fix the code.
"""
from __future__ import annotations

import pytest

from src.audit.base import CheckStatus
from src.audit.engine import CheckEngine
from src.audit.scoring import build_recommendations, compute_score, score_to_grade


def _audit(bundle):
    sections = CheckEngine().evaluate(bundle)
    score = compute_score(sections)
    return sections, score, score_to_grade(score), build_recommendations(sections)


class TestGoldenSites:
    """Golden score and grade per site profile."""

    def test_healthy_site(self, healthy_bundle):
        _, score, grade, recommendations = _audit(healthy_bundle)
        assert (score, grade) == (100, "A")
        assert recommendations == []

    def test_unreachable_site(self, make_bundle):
        """Every body fetch failed but the header probe succeeded."""
        _, score, grade, recommendations = _audit(make_bundle())
        assert (score, grade) == (53, "D")
        assert recommendations[:2] == [
            "robots.txt: Add a robots.txt at the root of your site.",
            "XML sitemap: Add sitemap.xml or reference it in robots.txt.",
        ]

    def test_site_blocking_all_crawlers(
        self, make_bundle, valid_html, sitemap_xml, secure_headers, llms_txt
    ):
        bundle = make_bundle(
            home_body=valid_html,
            headers=secure_headers,
            robots="User-agent: *\nDisallow: /\n",
            sitemap=sitemap_xml,
            llms_txt=llms_txt,
            llms_full_txt=llms_txt,
            security_txt="Contact: mailto:security@example.com",
        )
        sections, score, grade, recommendations = _audit(bundle)

        # 18.75 + 35 + 21.875 + 15
        assert (score, grade) == (91, "A")
        assert sections["crawlability"]["robots_txt"].status is CheckStatus.FAIL
        assert sections["ai_llm"]["ai_crawler_access"].value == (
            "Blocked: GPTBot, ClaudeBot, Google-Extended, PerplexityBot, Applebot-Extended"
        )
        assert recommendations == [
            "robots.txt: Do not Disallow: / for all user-agents.",
            "AI crawler access: Consider allowing AI crawlers in robots.txt for visibility.",
        ]

    def test_neglected_site(self, make_bundle, minimal_html):
        bundle = make_bundle(
            home_body=minimal_html,
            effective_url="http://example.com/",
            ttfb_ms=1500,
        )
        sections, score, grade, recommendations = _audit(bundle)

        # 3.125 + 12.25 + 12.5 + 7.5
        assert (score, grade) == (35, "F")
        assert sections["crawlability"]["response_time"].value == "1500 ms"
        assert recommendations[0] == "HTTPS active: Enable HTTPS and redirect HTTP to HTTPS."
        assert len(recommendations) == 10


class TestScoreConsistency:
    """Tests for score calculation consistency."""

    def test_same_input_same_output(self, make_bundle, minimal_html):
        bundle = make_bundle(home_body=minimal_html, robots="User-agent: GPTBot\nDisallow: /")
        results = [_audit(bundle) for _ in range(5)]
        assert all(result == results[0] for result in results)

    @pytest.mark.parametrize("ttfb_ms", [100, 500, 2000])
    def test_slower_response_never_raises_score(self, make_bundle, valid_html, ttfb_ms):
        fast = _audit(make_bundle(home_body=valid_html, ttfb_ms=50))[1]
        assert _audit(make_bundle(home_body=valid_html, ttfb_ms=ttfb_ms))[1] <= fast

    def test_fixing_a_check_never_lowers_score(self, make_bundle, minimal_html, robots_txt_allow_all):
        before = _audit(make_bundle(home_body=minimal_html))[1]
        after = _audit(make_bundle(home_body=minimal_html, robots=robots_txt_allow_all))[1]
        assert after > before
