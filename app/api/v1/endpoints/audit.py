"""Domain audit endpoint."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from app.api.models.errors import ErrorCodes, ErrorResponse
from app.api.models.requests import AuditRequest
from app.api.models.responses import AuditReportResponse
from app.api.v1.deps import check_rate_limit
from src.audit.runner import run_audit

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Audit"])


@router.post(
    "/audit",
    response_model=AuditReportResponse,
    dependencies=[Depends(check_rate_limit)],
    responses={
        422: {"description": "Invalid request body"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Audit failed"},
    },
    summary="Audit a domain",
    description="""
Run the SEO and AI-readiness audit for a domain and return the report.

**Sections:**
- **Crawlability** (25%): HTTPS, robots.txt, XML sitemap, response time
- **On-page SEO** (35%): title, meta description, canonical, viewport, H1, Open Graph,
  Twitter card, JSON-LD, language, favicon
- **AI/LLM readiness** (25%): llms.txt, llms-full.txt, AI crawler access, security.txt
- **Security headers** (15%): HSTS, X-Content-Type-Options, X-Frame-Options, CSP

An empty domain returns a report with `error` set and no checks.
""",
)
async def audit_domain(body: AuditRequest) -> AuditReportResponse:
    """Audit a domain synchronously."""
    try:
        report = await run_in_threadpool(run_audit, body.domain)
    except Exception as e:
        logger.exception(f"Audit of {body.domain!r} failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": {
                    "code": ErrorCodes.AUDIT_FAILED,
                    "message": f"Audit failed: {type(e).__name__}",
                }
            },
        ) from e

    return AuditReportResponse.model_validate(report.to_dict())
