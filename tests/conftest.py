"""Shared test fixtures and configuration."""
from __future__ import annotations

import pytest

from src.fetcher.site_fetcher import FetchBundle, FetchedResource

ORIGIN = "https://example.com"

SECURE_HEADERS = {
    "_status": "HTTP/1.1 200 OK",
    "content-type": "text/html; charset=utf-8",
    "strict-transport-security": "max-age=63072000",
    "x-content-type-options": "nosniff",
    "x-frame-options": "SAMEORIGIN",
    "content-security-policy": "default-src 'self'; frame-ancestors 'self'",
}

LLMS_TXT = """# Example

> Example is a demo site used in documentation.

## Docs

- [Guide](https://example.com/guide): How to use it
"""


@pytest.fixture
def valid_html() -> str:
    """Return a home page that passes every on-page check."""
    return """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Example Domain - Reference Site for Documentation</title>
    <meta name="description" content="Example Domain is reserved for use in illustrative examples in documents. You may use this domain in literature without prior coordination.">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link rel="canonical" href="https://example.com/">
    <link rel="icon" href="/favicon.svg">
    <meta property="og:title" content="Example Domain">
    <meta property="og:description" content="Reserved for illustrative examples.">
    <meta property="og:image" content="https://example.com/og.png">
    <meta property="og:url" content="https://example.com/">
    <meta name="twitter:card" content="summary_large_image">
    <script type="application/ld+json">{"@context": "https://schema.org", "@type": "WebSite", "name": "Example"}</script>
</head>
<body>
    <h1>Example Domain</h1>
    <p>This domain is for use in illustrative examples in documents.</p>
    <h2>More information</h2>
    <p><a href="https://www.iana.org/domains/example">IANA</a></p>
</body>
</html>"""


@pytest.fixture
def minimal_html() -> str:
    """Return minimal HTML for edge case testing."""
    return """<!DOCTYPE html>
<html>
<head><title>Minimal</title></head>
<body><p>Content</p></body>
</html>"""


@pytest.fixture
def html_multiple_h1() -> str:
    """Return HTML with multiple H1 tags."""
    return """<!DOCTYPE html>
<html>
<head><title>Multiple H1 Test</title></head>
<body>
    <h1>First H1</h1>
    <p>Content</p>
    <h1>Second H1</h1>
</body>
</html>"""


@pytest.fixture
def robots_txt_allow_all() -> str:
    """Return robots.txt that allows all crawlers."""
    return """User-agent: *
Allow: /
Disallow: /private/

Sitemap: https://example.com/sitemap.xml
"""


@pytest.fixture
def robots_txt_block_ai() -> str:
    """Return robots.txt that blocks AI crawlers."""
    return """User-agent: *
Allow: /

User-agent: GPTBot
Disallow: /

User-agent: ClaudeBot
Disallow: /

User-agent: PerplexityBot
Disallow: /
"""


@pytest.fixture
def sitemap_xml() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/</loc></url>
</urlset>"""


@pytest.fixture
def make_bundle():
    """Build a FetchBundle; ``home_*`` keyword arguments fill the home resource."""

    def _make(
        home_body: str | None = None,
        headers: dict[str, str] | None = None,
        effective_url: str | None = f"{ORIGIN}/",
        ttfb_ms: int | None = 120,
        robots: str | None = None,
        sitemap: str | None = None,
        llms_txt: str | None = None,
        llms_full_txt: str | None = None,
        security_txt: str | None = None,
    ) -> FetchBundle:
        return FetchBundle(
            origin=ORIGIN,
            home=FetchedResource(
                body=home_body,
                headers=headers or {},
                effective_url=effective_url,
                ttfb_ms=ttfb_ms,
            ),
            robots=FetchedResource(body=robots),
            sitemap=FetchedResource(body=sitemap),
            llms_txt=FetchedResource(body=llms_txt),
            llms_full_txt=FetchedResource(body=llms_full_txt),
            security_txt=FetchedResource(body=security_txt),
        )

    return _make


@pytest.fixture
def healthy_bundle(make_bundle, valid_html, robots_txt_allow_all, sitemap_xml) -> FetchBundle:
    """Bundle for a site that passes every check."""
    return make_bundle(
        home_body=valid_html,
        headers=SECURE_HEADERS,
        robots=robots_txt_allow_all,
        sitemap=sitemap_xml,
        llms_txt=LLMS_TXT,
        llms_full_txt=LLMS_TXT + "\nFull content.\n",
        security_txt="Contact: mailto:security@example.com\nExpires: 2030-01-01T00:00:00Z\n",
    )


@pytest.fixture
def secure_headers() -> dict[str, str]:
    return dict(SECURE_HEADERS)


@pytest.fixture
def llms_txt() -> str:
    return LLMS_TXT
