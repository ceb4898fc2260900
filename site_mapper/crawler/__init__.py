# site_mapper/crawler/__init__.py
"""Crawl engine: URL rules, robots.txt policy, fetching, link bookkeeping."""
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.errors import CrawlError, CrawlForbiddenError, InvalidSeedError
from site_mapper.crawler.models import CrawlResult, FetchResult, RobotsPolicy

__all__ = [
    "SiteCrawler",
    "CrawlError",
    "CrawlForbiddenError",
    "InvalidSeedError",
    "CrawlResult",
    "FetchResult",
    "RobotsPolicy",
]
