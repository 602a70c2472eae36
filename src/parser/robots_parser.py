"""robots.txt helpers for root-level blocking and sitemap discovery."""
from __future__ import annotations

import re
from collections.abc import Iterable

_USER_AGENT_RE = re.compile(r"^User-agent:\s*(.+)", re.IGNORECASE)
_DISALLOW_ROOT_RE = re.compile(r"^Disallow:\s*/\s*$", re.IGNORECASE)
_SITEMAP_RE = re.compile(r"Sitemap:\s*(\S+)", re.IGNORECASE)

WILDCARD_AGENT = "*"


def blocked_at_root(robots_text: str, user_agent: str) -> bool:
    """Return True when ``user_agent`` is disallowed from ``/``.

    Lines are scanned in order. A ``User-agent`` line naming the agent (or
    ``*``) opens a block; a blank or comment line closes it. A differing
    ``User-agent`` line leaves an open block open, so a group such as::

        User-agent: *
        User-agent: Bingbot
        Disallow: /

    still counts as blocking every agent. Only ``Disallow: /`` with nothing
    after the slash is a root block; ``Disallow: /private/`` is not.
    """
    text = robots_text.replace("\r\n", "\n")
    target = user_agent.lower()

    in_block = False
    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if not line or line.startswith("#"):
            in_block = False
            continue

        match = _USER_AGENT_RE.match(line)
        if match:
            agent = match.group(1).strip()
            if agent.lower() == target or agent == WILDCARD_AGENT:
                in_block = True
            continue

        if in_block and _DISALLOW_ROOT_RE.match(line):
            return True

    return False


def wildcard_blocks_root(robots_text: str) -> bool:
    """Return True when the ``*`` group disallows the whole site."""
    return blocked_at_root(robots_text, WILDCARD_AGENT)


def blocked_crawlers(robots_text: str, crawlers: Iterable[str]) -> list[str]:
    """Return the crawlers disallowed at root, in the order given."""
    return [bot for bot in crawlers if blocked_at_root(robots_text, bot)]


def sitemap_directives(robots_text: str) -> list[str]:
    """Return every URL declared with a ``Sitemap:`` directive."""
    return _SITEMAP_RE.findall(robots_text)
