"""On-page SEO signal extraction."""
from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, ParserRejectedMarkup

OPEN_GRAPH_KEYS = ("og:title", "og:description", "og:image", "og:url")

HOMEPAGE_UNAVAILABLE = "Homepage could not be fetched."
HTML_UNPARSABLE = "Could not parse HTML."


class MarkupParseError(Exception):
    """Raised when markup cannot be turned into a tree."""


class MarkupTree:
    """Tolerant, queryable view over an HTML document.

    Tag and attribute names are case-insensitive (the lxml HTML parser
    lowercases them). Attribute values are compared exactly, so
    ``og:image`` never matches ``og:image:width``.
    """

    def __init__(self, html: str):
        try:
            # Keep attributes such as rel as plain strings for exact matching.
            self._soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)
        except (ParserRejectedMarkup, ValueError, TypeError) as e:
            raise MarkupParseError(str(e)) from e

    def first_text(self, tag: str) -> str | None:
        node = self._soup.find(tag)
        if node is None:
            return None
        return node.get_text().strip()

    def first_attr(self, tag: str, attr: str, **match: str) -> str | None:
        """Return ``attr`` of the first ``tag`` whose attributes equal ``match``.

        An element that matches but lacks ``attr`` yields an empty string.
        """
        node = self._soup.find(tag, attrs=match)
        if node is None:
            return None
        return node.get(attr) or ""

    def count(self, tag: str, **match: str) -> int:
        return len(self._soup.find_all(tag, attrs=match))

    def root_attr(self, attr: str) -> str | None:
        root = self._soup.find("html")
        if root is None:
            return None
        return root.get(attr)

    def any_attr_contains(self, tag: str, attr: str, needle: str) -> bool:
        return any(needle in (node.get(attr) or "") for node in self._soup.find_all(tag))

    def meta_content(self, key: str) -> str | None:
        """Value of the first ``<meta>`` whose property or name is exactly ``key``.

        ``content`` is preferred and ``value`` is used when content is empty.
        Elements with neither are skipped.
        """
        for node in self._soup.find_all("meta"):
            if node.get("property") != key and node.get("name") != key:
                continue
            value = node.get("content") or node.get("value")
            if value:
                return value
        return None


@dataclass(frozen=True)
class PageSignals:
    """Signals extracted from the home page.

    When ``error`` is set the page could not be fetched or parsed and the
    remaining fields hold no information.
    """
    title: str | None = None
    meta_description: str | None = None
    canonical: str | None = None
    viewport: str | None = None
    h1_count: int = 0
    open_graph: dict[str, str | None] = field(default_factory=dict)
    twitter_card: str | None = None
    structured_data_count: int = 0
    lang: str | None = None
    favicon: bool = False
    error: str | None = None

    @classmethod
    def unavailable(cls, reason: str) -> PageSignals:
        return cls(error=reason)

    @property
    def has_viewport(self) -> bool:
        return self.viewport is not None and "width" in self.viewport.lower()

    @property
    def open_graph_complete(self) -> bool:
        return all(self.open_graph.get(key) for key in OPEN_GRAPH_KEYS)


def extract_page_signals(html: str | None) -> PageSignals:
    """Extract the on-page SEO signals of a document.

    Args:
        html: Raw HTML of the home page, or None if it was not fetched

    Returns:
        PageSignals, or an unavailable result carrying the reason
    """
    if not html:
        return PageSignals.unavailable(HOMEPAGE_UNAVAILABLE)

    try:
        tree = MarkupTree(html)
    except MarkupParseError:
        return PageSignals.unavailable(HTML_UNPARSABLE)

    # rel="icon", "shortcut icon", "apple-touch-icon", ...
    favicon = tree.any_attr_contains("link", "rel", "icon")
    if not favicon:
        favicon = "favicon.ico" in html.lower()

    return PageSignals(
        title=tree.first_text("title"),
        meta_description=tree.first_attr("meta", "content", name="description"),
        canonical=tree.first_attr("link", "href", rel="canonical"),
        viewport=tree.first_attr("meta", "content", name="viewport"),
        h1_count=tree.count("h1"),
        open_graph={key: tree.meta_content(key) for key in OPEN_GRAPH_KEYS},
        twitter_card=tree.meta_content("twitter:card"),
        structured_data_count=tree.count("script", type="application/ld+json"),
        lang=tree.root_attr("lang"),
        favicon=favicon,
    )
