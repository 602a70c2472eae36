"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class CheckResult(BaseModel):
    """Single graded check."""

    status: Literal["pass", "warn", "fail"]
    label: str
    value: str
    fix: str | None = Field(default=None, description="Suggested fix; null when passed")


class AuditReportResponse(BaseModel):
    """Audit report in the fixed report schema."""

    domain: str
    error: str | None = None
    score: int = Field(..., ge=0, le=100, description="Weighted score (0-100)")
    grade: Literal["A", "B", "C", "D", "F"] = Field(..., description="Letter grade")
    sections: dict[str, dict[str, CheckResult]] = Field(
        default_factory=dict,
        description="crawlability, on_page, ai_llm and security checks, in report order",
    )
    recommendations: list[str] = Field(default_factory=list, max_length=10)

    model_config = {
        "json_schema_extra": {
            "example": {
                "domain": "example.com",
                "error": None,
                "score": 68,
                "grade": "C",
                "sections": {
                    "crawlability": {
                        "https": {
                            "status": "pass",
                            "label": "HTTPS active",
                            "value": "Yes",
                            "fix": None,
                        },
                    },
                },
                "recommendations": ["llms.txt: Add /llms.txt with H1, blockquote summary, and sections."],
            }
        }
    }


class ToolDescriptor(BaseModel):
    """Registration metadata for hosting the audit as a tool."""

    slug: str
    name: str
    summary: str
    description_md: str
    categories: list[str]
    tags: list[str]
    input_schema: dict[str, dict[str, Any]]
    mode: Literal["sync", "async"]
    is_public: bool
    rate_limit_per_minute: int
    cache_ttl_seconds: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "degraded"]
    version: str
    timestamp: datetime
    checks: dict[str, bool] = Field(default_factory=dict)
