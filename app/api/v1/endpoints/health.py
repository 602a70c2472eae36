"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from bs4.builder import builder_registry
from fastapi import APIRouter

from app.api.models.responses import HealthResponse

router = APIRouter(tags=["Health"])

VERSION = "1.0.0"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and service status.",
)
async def health_check() -> HealthResponse:
    """Return API health status."""
    checks: dict[str, bool] = {}
    overall_status = "healthy"

    # Page signal extraction needs the lxml tree builder
    checks["lxml_parser"] = builder_registry.lookup("lxml") is not None
    if not checks["lxml_parser"]:
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=VERSION,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
