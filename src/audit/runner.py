"""Entry point for auditing a domain."""
from __future__ import annotations

import logging
import re

from src.audit.base import AuditReport
from src.audit.engine import CheckEngine
from src.audit.scoring import build_recommendations, compute_score, score_to_grade
from src.config.settings import Settings
from src.config.settings import settings as default_settings
from src.fetcher.site_fetcher import fetch_all

logger = logging.getLogger(__name__)

EMPTY_DOMAIN_MESSAGE = "Please enter a domain (e.g. example.com)."

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_domain(raw: str) -> str:
    """Reduce user input such as ``HTTPS://Example.com/about/`` to ``example.com``."""
    domain = raw.strip()
    if not domain:
        return ""
    domain = _SCHEME_RE.sub("", domain)
    domain = domain.rstrip("/")
    domain = domain.split("/", 1)[0]
    return domain.lower()


def run_audit(domain: str, settings: Settings | None = None) -> AuditReport:
    """Audit a domain and return the full report.

    Never raises for network or markup problems; those show up as
    degraded checks. An empty domain returns an error report without
    touching the network.
    """
    settings = settings or default_settings
    normalized = normalize_domain(domain)
    if not normalized:
        return AuditReport.input_error(EMPTY_DOMAIN_MESSAGE)

    origin = f"https://{normalized}"
    logger.info(f"Auditing {origin}")

    bundle = fetch_all(origin, settings.fetcher)
    sections = CheckEngine(settings.checks).evaluate(bundle)

    score = compute_score(sections, settings.scoring)
    grade = score_to_grade(score, settings.scoring)
    recommendations = build_recommendations(sections, settings.scoring.max_recommendations)

    logger.info(f"Audit of {normalized} complete: {score}/100 ({grade})")

    return AuditReport(
        domain=normalized,
        score=score,
        grade=grade,
        sections=sections,
        recommendations=recommendations,
    )
