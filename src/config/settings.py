"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class FetcherSettings:
    """Settings for the site fetcher."""
    request_timeout: int = 5
    home_max_redirects: int = 3
    resource_max_redirects: int = 2
    max_workers: int = 6
    max_response_size: int = 10 * 1024 * 1024  # 10 MB
    # Audited sites are reached even with broken certificates.
    verify_tls: bool = False
    block_private_hosts: bool = True
    user_agent: str = "SEO-Audit/1.0"


@dataclass
class CheckSettings:
    """Thresholds for the check engine."""
    title_min_length: int = 30
    title_max_length: int = 60

    description_min_length: int = 120
    description_max_length: int = 160

    ttfb_good_ms: int = 400
    ttfb_slow_ms: int = 1000

    ai_crawlers: tuple[str, ...] = (
        "GPTBot",
        "ClaudeBot",
        "Google-Extended",
        "PerplexityBot",
        "Applebot-Extended",
    )


@dataclass
class ScoringSettings:
    """Settings for score, grade and recommendations."""
    section_weights: dict[str, float] = field(default_factory=lambda: {
        "crawlability": 0.25,
        "on_page": 0.35,
        "ai_llm": 0.25,
        "security": 0.15,
    })
    status_points: dict[str, int] = field(default_factory=lambda: {
        "pass": 100,
        "warn": 50,
        "fail": 0,
    })

    # Grade thresholds
    grade_a_threshold: int = 90
    grade_b_threshold: int = 75
    grade_c_threshold: int = 60
    grade_d_threshold: int = 40

    max_recommendations: int = 10


@dataclass
class APISettings:
    """API-specific settings."""
    rate_limit_requests: int = 10
    rate_limit_window: int = 60  # seconds
    max_domain_length: int = 253
    # Only honour X-Forwarded-For when a trusted reverse proxy sets it.
    trust_proxy_headers: bool = False

    # CORS
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class Settings:
    """Main application settings container."""
    fetcher: FetcherSettings = field(default_factory=FetcherSettings)
    checks: CheckSettings = field(default_factory=CheckSettings)
    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    api: APISettings = field(default_factory=APISettings)

    debug: bool = False

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("SEO_AUDIT_DEBUG", "").lower() in ("true", "1", "yes")

        # Fetcher overrides
        if timeout := os.environ.get("SEO_AUDIT_REQUEST_TIMEOUT"):
            self.fetcher.request_timeout = int(timeout)
        if workers := os.environ.get("SEO_AUDIT_MAX_WORKERS"):
            self.fetcher.max_workers = int(workers)
        if os.environ.get("SEO_AUDIT_ALLOW_PRIVATE_HOSTS", "").lower() in ("true", "1", "yes"):
            self.fetcher.block_private_hosts = False

        # API overrides
        if rate_limit := os.environ.get("SEO_AUDIT_RATE_LIMIT"):
            self.api.rate_limit_requests = int(rate_limit)
        if cors := os.environ.get("SEO_AUDIT_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]
        if os.environ.get("SEO_AUDIT_TRUST_PROXY", "").lower() in ("true", "1", "yes"):
            self.api.trust_proxy_headers = True


# Global settings instance
settings = Settings()
