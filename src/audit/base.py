"""Core result types for the site audit."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CheckStatus(Enum):
    """Outcome of a single check."""
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


# Section name -> check keys, in report order.
SECTION_KEYS: dict[str, tuple[str, ...]] = {
    "crawlability": ("https", "robots_txt", "sitemap", "response_time"),
    "on_page": (
        "title",
        "meta_description",
        "canonical",
        "viewport",
        "h1",
        "open_graph",
        "twitter_card",
        "structured_data",
        "lang",
        "favicon",
    ),
    "ai_llm": ("llms_txt", "llms_full_txt", "ai_crawler_access", "security_txt"),
    "security": ("hsts", "x_content_type_options", "x_frame_options", "content_security_policy"),
}


@dataclass(frozen=True)
class Check:
    """Result of a single audit check.

    Attributes:
        status: pass, warn or fail
        label: Human-readable name of the check
        value: Short summary of what was observed
        fix: One-line suggestion; None when the check passed
    """
    status: CheckStatus
    label: str
    value: str
    fix: str | None = None

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASS

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "label": self.label,
            "value": self.value,
            "fix": self.fix,
        }


Section = dict[str, Check]


@dataclass(frozen=True)
class AuditReport:
    """Complete audit of one domain."""
    domain: str
    score: int
    grade: str
    sections: dict[str, Section] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def input_error(cls, message: str) -> AuditReport:
        return cls(domain="", score=0, grade="F", error=message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the report schema consumed by renderers."""
        return {
            "domain": self.domain,
            "error": self.error,
            "score": self.score,
            "grade": self.grade,
            "sections": {
                name: {key: check.to_dict() for key, check in checks.items()}
                for name, checks in self.sections.items()
            },
            "recommendations": list(self.recommendations),
        }
