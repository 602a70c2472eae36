"""Check engine: turns fetched resources into graded audit sections."""
from __future__ import annotations

import re

from src.audit.base import SECTION_KEYS, Check, CheckStatus, Section
from src.audit.policy import ensure_reachable
from src.config.settings import CheckSettings
from src.fetcher.site_fetcher import FetchBundle
from src.parser.page_signals import PageSignals, extract_page_signals
from src.parser.robots_parser import blocked_crawlers, sitemap_directives, wildcard_blocks_root

PASS = CheckStatus.PASS
WARN = CheckStatus.WARN
FAIL = CheckStatus.FAIL

_SITEMAP_MARKERS = ("<url>", "<sitemap>", "<sitemapindex")
_MARKDOWN_H1_RE = re.compile(r"^#\s+.+", re.MULTILINE)
_BLOCKQUOTE_RE = re.compile(r"^>", re.MULTILINE)


def _grade(key: str, status: CheckStatus, label: str, value: str, fix: str | None = None) -> Check:
    ensure_reachable(key, status)
    return Check(status=status, label=label, value=value, fix=None if status is PASS else fix)


def _has_text(text: str | None) -> bool:
    return text is not None and text.strip() != ""


def _byte_length(text: str | None) -> int:
    """Length of ``text`` in UTF-8 bytes; multibyte scripts count per byte."""
    return len(text.encode("utf-8")) if text else 0


class CheckEngine:
    """Evaluates a FetchBundle into the four report sections.

    The engine holds no state besides its thresholds, so evaluating the
    same bundle twice gives the same result.
    """

    def __init__(self, checks: CheckSettings | None = None):
        self.checks = checks or CheckSettings()

    def evaluate(self, bundle: FetchBundle) -> dict[str, Section]:
        return {
            "crawlability": self.crawlability(bundle),
            "on_page": self.on_page(extract_page_signals(bundle.home.body)),
            "ai_llm": self.ai_llm(bundle),
            "security": self.security(bundle.home.headers),
        }

    def crawlability(self, bundle: FetchBundle) -> Section:
        home = bundle.home
        robots = bundle.robots.body
        sitemap = bundle.sitemap.body
        url = home.effective_url or f"{bundle.origin}/"

        checks: Section = {}

        is_https = url.startswith("https://")
        checks["https"] = _grade(
            "https", PASS if is_https else FAIL,
            "HTTPS active",
            "Yes" if is_https else "No",
            "Enable HTTPS and redirect HTTP to HTTPS.",
        )

        has_robots = _has_text(robots)
        if has_robots and wildcard_blocks_root(robots):
            checks["robots_txt"] = _grade(
                "robots_txt", FAIL, "robots.txt", "Present",
                "Do not Disallow: / for all user-agents.",
            )
        elif has_robots:
            checks["robots_txt"] = _grade("robots_txt", PASS, "robots.txt", "Present")
        else:
            checks["robots_txt"] = _grade(
                "robots_txt", WARN, "robots.txt", "Missing",
                "Add a robots.txt at the root of your site.",
            )

        # Regular sitemaps and sitemap index files both count.
        has_sitemap = sitemap is not None and any(
            marker in sitemap.lower() for marker in _SITEMAP_MARKERS
        )
        if not has_sitemap and has_robots and sitemap_directives(robots):
            has_sitemap = True
        checks["sitemap"] = _grade(
            "sitemap", PASS if has_sitemap else FAIL,
            "XML sitemap",
            "Present" if has_sitemap else "Missing",
            "Add sitemap.xml or reference it in robots.txt.",
        )

        checks["response_time"] = self._response_time(home.ttfb_ms)
        return checks

    def _response_time(self, ttfb_ms: int | None) -> Check:
        if ttfb_ms is None:
            return _grade(
                "response_time", WARN, "Response time", "Unknown",
                "Could not measure; check that the site is reachable.",
            )
        if ttfb_ms < self.checks.ttfb_good_ms:
            status, fix = PASS, None
        elif ttfb_ms < self.checks.ttfb_slow_ms:
            status, fix = WARN, f"Aim for TTFB under {self.checks.ttfb_good_ms} ms."
        else:
            status, fix = FAIL, f"Improve server or CDN to get TTFB under {self.checks.ttfb_good_ms} ms."
        return _grade("response_time", status, "Response time", f"{ttfb_ms} ms", fix)

    def on_page(self, signals: PageSignals) -> Section:
        if signals.error:
            # Not graded: every on-page check degrades to warn.
            return {
                key: Check(status=WARN, label=key, value="—", fix=signals.error)
                for key in SECTION_KEYS["on_page"]
            }

        cfg = self.checks
        checks: Section = {}

        title = signals.title
        title_len = _byte_length(title)
        if title is None:
            title_fix = "Add a <title> tag."
        else:
            title_fix = f"Aim for {cfg.title_min_length}–{cfg.title_max_length} characters."
        checks["title"] = _grade(
            "title",
            self._banded(title_len, cfg.title_min_length, cfg.title_max_length),
            "Title tag",
            title if title is not None else "Missing",
            title_fix,
        )

        description = signals.meta_description
        if not description:
            description_fix = 'Add <meta name="description" content="...">.'
        else:
            description_fix = f"Aim for {cfg.description_min_length}–{cfg.description_max_length} characters."
        checks["meta_description"] = _grade(
            "meta_description",
            self._banded(
                _byte_length(description), cfg.description_min_length, cfg.description_max_length
            ),
            "Meta description",
            description or "Missing",
            description_fix,
        )

        canonical = signals.canonical
        checks["canonical"] = _grade(
            "canonical", PASS if canonical else WARN,
            "Canonical URL",
            canonical or "Missing",
            'Add <link rel="canonical" href="...">.',
        )

        checks["viewport"] = _grade(
            "viewport", PASS if signals.has_viewport else FAIL,
            "Viewport meta",
            "Present" if signals.has_viewport else "Missing",
            'Add <meta name="viewport" content="width=device-width, initial-scale=1">.',
        )

        h1_count = signals.h1_count
        if h1_count == 1:
            checks["h1"] = _grade("h1", PASS, "H1 tag", "One H1")
        elif h1_count > 1:
            checks["h1"] = _grade("h1", WARN, "H1 tag", f"{h1_count} H1(s)", "Use a single H1 per page.")
        else:
            checks["h1"] = _grade("h1", FAIL, "H1 tag", "0 H1(s)", "Add exactly one <h1> on the page.")

        og_ok = signals.open_graph_complete
        checks["open_graph"] = _grade(
            "open_graph", PASS if og_ok else WARN,
            "Open Graph",
            "Present" if og_ok else "Incomplete",
            "Add og:title, og:description, og:image, og:url.",
        )

        twitter_card = bool(signals.twitter_card)
        checks["twitter_card"] = _grade(
            "twitter_card", PASS if twitter_card else WARN,
            "Twitter/X card",
            "Present" if twitter_card else "Missing",
            'Add <meta name="twitter:card" content="summary_large_image"> (or similar).',
        )

        has_json_ld = signals.structured_data_count > 0
        checks["structured_data"] = _grade(
            "structured_data", PASS if has_json_ld else WARN,
            "Structured data",
            "JSON-LD present" if has_json_ld else "Missing",
            'Add JSON-LD (e.g. Organization, WebSite) in <script type="application/ld+json">.',
        )

        lang = signals.lang
        checks["lang"] = _grade(
            "lang", PASS if lang else WARN,
            "Language attribute",
            lang or "Missing",
            'Add <html lang="en"> (or your language code).',
        )

        checks["favicon"] = _grade(
            "favicon", PASS if signals.favicon else WARN,
            "Favicon",
            "Present" if signals.favicon else "Missing",
            'Add <link rel="icon" href="/favicon.ico"> or equivalent.',
        )

        return checks

    @staticmethod
    def _banded(length: int, minimum: int, maximum: int) -> CheckStatus:
        if minimum <= length <= maximum:
            return PASS
        return WARN if length > 0 else FAIL

    def ai_llm(self, bundle: FetchBundle) -> Section:
        robots = bundle.robots.body
        llms_txt = bundle.llms_txt.body

        checks: Section = {}

        has_llms = _has_text(llms_txt)
        llms_valid = (
            has_llms
            and _MARKDOWN_H1_RE.search(llms_txt) is not None
            and _BLOCKQUOTE_RE.search(llms_txt) is not None
        )
        if llms_valid:
            checks["llms_txt"] = _grade("llms_txt", PASS, "llms.txt", "Valid")
        elif has_llms:
            checks["llms_txt"] = _grade(
                "llms_txt", WARN, "llms.txt", "Incomplete",
                "Include H1 and blockquote summary.",
            )
        else:
            checks["llms_txt"] = _grade(
                "llms_txt", FAIL, "llms.txt", "Missing",
                "Add /llms.txt with H1, blockquote summary, and sections.",
            )

        has_full = _has_text(bundle.llms_full_txt.body)
        checks["llms_full_txt"] = _grade(
            "llms_full_txt", PASS if has_full else WARN,
            "llms-full.txt",
            "Present" if has_full else "Optional",
            "Optional: add /llms-full.txt for full content for AI.",
        )

        blocked = blocked_crawlers(robots, self.checks.ai_crawlers) if robots is not None else []
        checks["ai_crawler_access"] = _grade(
            "ai_crawler_access", WARN if blocked else PASS,
            "AI crawler access",
            f"Blocked: {', '.join(blocked)}" if blocked else "Allowed",
            "Consider allowing AI crawlers in robots.txt for visibility.",
        )

        has_security_txt = _has_text(bundle.security_txt.body)
        checks["security_txt"] = _grade(
            "security_txt", PASS if has_security_txt else WARN,
            "security.txt",
            "Present" if has_security_txt else "Missing",
            "Add /.well-known/security.txt for security contact.",
        )

        return checks

    def security(self, headers: dict[str, str]) -> Section:
        lowered = {name.lower(): value for name, value in headers.items()}
        checks: Section = {}

        hsts = lowered.get("strict-transport-security")
        checks["hsts"] = _grade(
            "hsts", PASS if hsts else WARN,
            "Strict-Transport-Security",
            "Present" if hsts else "Missing",
            "Add Strict-Transport-Security header.",
        )

        xcto = lowered.get("x-content-type-options")
        nosniff = xcto is not None and "nosniff" in xcto.lower()
        checks["x_content_type_options"] = _grade(
            "x_content_type_options", PASS if nosniff else WARN,
            "X-Content-Type-Options",
            xcto or "Missing",
            "Add X-Content-Type-Options: nosniff.",
        )

        xfo = lowered.get("x-frame-options")
        csp = lowered.get("content-security-policy")
        frame_protection = bool(xfo) or (csp is not None and "frame-ancestors" in csp.lower())
        checks["x_frame_options"] = _grade(
            "x_frame_options", PASS if frame_protection else WARN,
            "X-Frame-Options / CSP",
            "Present" if frame_protection else "Missing",
            "Add X-Frame-Options or CSP frame-ancestors.",
        )

        checks["content_security_policy"] = _grade(
            "content_security_policy", PASS if csp else WARN,
            "Content-Security-Policy",
            "Present" if csp else "Missing",
            "Consider adding Content-Security-Policy header.",
        )

        return checks
