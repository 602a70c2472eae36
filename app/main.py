"""FastAPI entry point."""
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.models.errors import ErrorCodes
from app.api.v1.router import router as api_router
from src.config.settings import settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    # CSP for Swagger UI / ReDoc (needs CDN resources)
    API_DOCS_CSP = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
        "img-src 'self' data: https://cdn.jsdelivr.net https://fastapi.tiangolo.com; "
        "font-src 'self' https://cdn.jsdelivr.net; "
        "connect-src 'self'; "
        "frame-ancestors 'none'"
    )

    DEFAULT_CSP = "default-src 'none'; frame-ancestors 'none'"

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if request.url.path in ("/api/docs", "/api/redoc", "/api/openapi.json"):
            response.headers["Content-Security-Policy"] = self.API_DOCS_CSP
        else:
            response.headers["Content-Security-Policy"] = self.DEFAULT_CSP

        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class APIRateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Add rate limit headers to API responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if hasattr(request.state, "rate_limit_remaining"):
            response.headers["X-RateLimit-Remaining"] = str(
                request.state.rate_limit_remaining
            )
        if hasattr(request.state, "rate_limit_reset"):
            response.headers["X-RateLimit-Reset"] = str(
                int(time.time()) + request.state.rate_limit_reset
            )
        if hasattr(request.state, "rate_limit_limit"):
            response.headers["X-RateLimit-Limit"] = str(request.state.rate_limit_limit)

        return response


app = FastAPI(
    title="SEO Audit API",
    description="""
API for auditing a domain's SEO and AI/LLM readiness.

## Checks

- **Crawlability**: HTTPS, robots.txt, XML sitemap, response time
- **On-page SEO**: title, meta description, canonical, viewport, H1, Open Graph, Twitter card, JSON-LD, lang, favicon
- **AI/LLM readiness**: llms.txt, llms-full.txt, AI crawler access (GPTBot, ClaudeBot, ...), security.txt
- **Security headers**: HSTS, X-Content-Type-Options, X-Frame-Options, Content-Security-Policy

Each check is graded pass, warn or fail. The report carries a weighted 0-100 score,
an A-F grade and up to ten recommendations.

## Rate limits

10 audits per minute per client.
""",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Add middlewares (order matters: outermost first)
app.add_middleware(APIRateLimitHeadersMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Wrap request validation errors in the standard error envelope."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": {
                    "code": ErrorCodes.INVALID_REQUEST,
                    "message": "Invalid request body.",
                    "details": {
                        "errors": [
                            {"loc": list(error["loc"]), "message": error["msg"]}
                            for error in exc.errors()
                        ]
                    },
                }
            }
        },
    )
