# site_mapper/crawler/errors.py
"""
Fatal crawl conditions. Everything else is recovered inside the crawler.
"""
from __future__ import annotations


class CrawlError(Exception):
    """Base class for conditions that abort a crawl before any page fetch."""


class InvalidSeedError(CrawlError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Please provide a valid http/https starting URL (got {url!r})")
        self.url = url


class CrawlForbiddenError(CrawlError):
    def __init__(self, domain: str) -> None:
        super().__init__(f"{domain}/robots.txt disallows crawlers at all locations")
        self.domain = domain
