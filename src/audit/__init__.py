"""Site audit: check engine, scoring and report types."""
from src.audit.base import SECTION_KEYS, AuditReport, Check, CheckStatus
from src.audit.engine import CheckEngine
from src.audit.runner import normalize_domain, run_audit
from src.audit.scoring import build_recommendations, compute_score, score_to_grade

__all__ = [
    "SECTION_KEYS",
    "AuditReport",
    "Check",
    "CheckStatus",
    "CheckEngine",
    "normalize_domain",
    "run_audit",
    "build_recommendations",
    "compute_score",
    "score_to_grade",
]
