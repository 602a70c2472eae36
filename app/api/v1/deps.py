"""API dependencies for rate limiting."""
from __future__ import annotations

import time

from cachetools import TTLCache
from fastapi import HTTPException, Request, status

from app.api.models.errors import ErrorCodes
from src.config.settings import settings


class APIRateLimiter:
    """Per-client sliding window limiter with automatic TTL-based cleanup."""

    def __init__(self, max_identifiers: int = 10000):
        # TTL = 2x rate limit window so entries outlive the window
        ttl = settings.api.rate_limit_window * 2
        self._requests: TTLCache[str, list[float]] = TTLCache(
            maxsize=max_identifiers, ttl=ttl
        )

    def _get_identifier(self, request: Request) -> str:
        """Client IP; X-Forwarded-For is only read behind a trusted proxy."""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded and settings.api.trust_proxy_headers:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def check(self, request: Request) -> tuple[bool, int, int]:
        """
        Check if request is within rate limit.

        Returns:
            (allowed, remaining, reset_seconds)
        """
        identifier = self._get_identifier(request)
        limit = settings.api.rate_limit_requests
        window = settings.api.rate_limit_window

        now = time.time()
        window_start = now - window

        requests = [t for t in self._requests.get(identifier, []) if t > window_start]

        if len(requests) >= limit:
            oldest = min(requests) if requests else now
            reset_seconds = int(oldest + window - now)
            self._requests[identifier] = requests
            return False, 0, max(1, reset_seconds)

        requests.append(now)
        self._requests[identifier] = requests
        return True, max(0, limit - len(requests)), window


# Global rate limiter instance
api_rate_limiter = APIRateLimiter()


async def check_rate_limit(request: Request) -> None:
    """Enforce API rate limits.

    Raises HTTPException if rate limit exceeded.
    """
    allowed, remaining, reset = api_rate_limiter.check(request)

    request.state.rate_limit_remaining = remaining
    request.state.rate_limit_reset = reset
    request.state.rate_limit_limit = settings.api.rate_limit_requests

    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": {
                    "code": ErrorCodes.RATE_LIMIT_EXCEEDED,
                    "message": "Too many requests. Please slow down.",
                    "details": {
                        "retry_after": reset,
                        "limit": settings.api.rate_limit_requests,
                    },
                }
            },
            headers={
                "Retry-After": str(reset),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(int(time.time()) + reset),
            },
        )
