# site_mapper/crawler/robots.py
"""
robots.txt handling: only the wildcard user agent's Disallow lines and any
Crawl-delay line are honoured.
"""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterable, List

from site_mapper.crawler.models import RobotsPolicy
from site_mapper.logger import LOGGER_NAME

if TYPE_CHECKING:
    from site_mapper.crawler.fetcher import PageFetcher

__all__ = ("parse_robots", "fetch_robots", "is_disallowed")

_WILDCARD_AGENT = "user-agent: *"
_AGENT = "user-agent: "
_DISALLOW = "disallow: "
_CRAWL_DELAY = "crawl-delay: "

logger = logging.getLogger(LOGGER_NAME)


def parse_robots(text: str) -> RobotsPolicy:
    """
    Scan robots.txt line by line.

    ``user-agent: *`` switches collection of Disallow paths on, any other
    user-agent line switches it off. Crawl-delay is read wherever it appears;
    a value that is not an integer leaves the previous one in place.
    """
    disallow: List[str] = []
    crawl_delay = 0
    in_wildcard_group = False

    for raw in text.splitlines():
        line = raw.strip().lower()
        if line.startswith(_WILDCARD_AGENT):
            in_wildcard_group = True
        elif line.startswith(_AGENT):
            in_wildcard_group = False
        elif in_wildcard_group and line.startswith(_DISALLOW):
            disallow.append(line[len(_DISALLOW):])
        elif line.startswith(_CRAWL_DELAY):
            try:
                crawl_delay = int(line[len(_CRAWL_DELAY):])
            except ValueError:
                logger.debug("Ignoring non-integer crawl-delay: %r", line)

    return RobotsPolicy(disallow=tuple(disallow), crawl_delay=crawl_delay)


async def fetch_robots(fetcher: PageFetcher, domain: str) -> RobotsPolicy:
    """Fetch ``{domain}/robots.txt``; any failure yields the empty policy."""
    robots_url = f"{domain}/robots.txt"
    result = await fetcher.fetch(robots_url)
    if not result.ok:
        logger.info("No usable robots.txt at %s (%s), crawling unrestricted", robots_url, result.reason)
        return RobotsPolicy()

    policy = parse_robots(result.body)
    if policy.active:
        logger.info(
            "robots.txt: %d disallowed location(s), crawl-delay %ds",
            len(policy.disallow),
            policy.crawl_delay,
        )
    return policy


def _disallow_pattern(entry: str) -> re.Pattern[str]:
    return re.compile(f"({re.escape(entry)}[^a-zA-Z0-9])|({re.escape(entry.replace('*', ''))})")


def is_disallowed(url: str, disallow: Iterable[str]) -> bool:
    """
    Conservative match of *url* against robots.txt Disallow fragments.

    An entry matches when it appears in the URL followed by a
    non-alphanumeric character, or when it appears with its ``*`` characters
    removed. Wildcards are not expanded.
    """
    lowered = url.lower()
    return any(_disallow_pattern(entry).search(lowered) for entry in disallow)
