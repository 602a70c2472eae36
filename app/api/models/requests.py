"""API request models."""
from __future__ import annotations

from pydantic import BaseModel, Field

from src.config.settings import settings


class AuditRequest(BaseModel):
    """Request body for a domain audit."""

    domain: str = Field(
        ...,
        max_length=settings.api.max_domain_length,
        description="Domain to audit, with or without https://",
        examples=["example.com"],
    )
