"""Tool registration metadata endpoint."""
from __future__ import annotations

from fastapi import APIRouter

from app.api.models.responses import ToolDescriptor
from src.config.settings import settings

router = APIRouter(tags=["Tool"])

DESCRIPTION_MD = """## SEO Audit

Enter a domain to run a full SEO and AI-readiness audit. We check:

- **Crawlability**: HTTPS, robots.txt, XML sitemap, response time
- **On-page SEO**: title, meta description, canonical, viewport, H1, Open Graph, Twitter cards, JSON-LD, language, favicon
- **AI/LLM readiness**: llms.txt, llms-full.txt, AI crawler access in robots.txt, security.txt
- **Security headers**: HSTS, X-Content-Type-Options, X-Frame-Options, Content-Security-Policy

Each check shows pass, warn, or fail with a short fix suggestion. Get a letter grade (A-F) and section scores to prioritise improvements.
"""


@router.get(
    "/tool",
    response_model=ToolDescriptor,
    summary="Tool descriptor",
    description="Metadata a host application needs to register and render the audit tool.",
)
async def tool_descriptor() -> ToolDescriptor:
    """Return tool registration metadata."""
    return ToolDescriptor(
        slug="seo-audit",
        name="SEO Audit",
        summary=(
            "Check crawlability, on-page SEO, AI/LLM readiness (llms.txt, sitemap, robots.txt), "
            "and security headers for any domain."
        ),
        description_md=DESCRIPTION_MD,
        categories=["productivity"],
        tags=["seo", "audit", "llms", "sitemap", "robots", "ai"],
        input_schema={
            "domain": {
                "type": "string",
                "label": "Domain",
                "placeholder": "example.com",
                "required": True,
                "max_length": settings.api.max_domain_length,
                "help": "Enter the domain to audit (with or without https://).",
            },
        },
        mode="sync",
        is_public=True,
        rate_limit_per_minute=settings.api.rate_limit_requests,
        cache_ttl_seconds=0,
    )
