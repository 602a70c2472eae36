"""Outcomes each check is allowed to reach.

Only crawlability fundamentals and a missing llms.txt can fail. Everything
else is a best-practice gap and stops at warn.
"""
from __future__ import annotations

from src.audit.base import CheckStatus

_PASS_WARN = frozenset({CheckStatus.PASS, CheckStatus.WARN})
_PASS_FAIL = frozenset({CheckStatus.PASS, CheckStatus.FAIL})
_ANY = frozenset(CheckStatus)

CHECK_OUTCOMES: dict[str, frozenset[CheckStatus]] = {
    # crawlability
    "https": _PASS_FAIL,
    "robots_txt": _ANY,
    "sitemap": _PASS_FAIL,
    "response_time": _ANY,
    # on_page
    "title": _ANY,
    "meta_description": _ANY,
    "canonical": _PASS_WARN,
    "viewport": _PASS_FAIL,
    "h1": _ANY,
    "open_graph": _PASS_WARN,
    "twitter_card": _PASS_WARN,
    "structured_data": _PASS_WARN,
    "lang": _PASS_WARN,
    "favicon": _PASS_WARN,
    # ai_llm
    "llms_txt": _ANY,
    "llms_full_txt": _PASS_WARN,
    "ai_crawler_access": _PASS_WARN,
    "security_txt": _PASS_WARN,
    # security
    "hsts": _PASS_WARN,
    "x_content_type_options": _PASS_WARN,
    "x_frame_options": _PASS_WARN,
    "content_security_policy": _PASS_WARN,
}


def can_fail(check_key: str) -> bool:
    return CheckStatus.FAIL in CHECK_OUTCOMES[check_key]


def ensure_reachable(check_key: str, status: CheckStatus) -> None:
    """Raise ValueError if ``status`` is not a valid outcome for the check."""
    allowed = CHECK_OUTCOMES.get(check_key)
    if allowed is None:
        raise ValueError(f"Unknown check: {check_key}")
    if status not in allowed:
        raise ValueError(f"Check {check_key} cannot be graded {status.value}")
