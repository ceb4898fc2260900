# site_mapper/crawler/models.py
"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Outcome of one GET: either a body or the reason there is none."""

    url: str
    ok: bool
    body: str = ""
    reason: str = ""
    status: Optional[int] = None

    @classmethod
    def success(cls, url: str, body: str, status: Optional[int] = 200) -> FetchResult:
        return cls(url=url, ok=True, body=body, status=status)

    @classmethod
    def failure(cls, url: str, reason: str, status: Optional[int] = None) -> FetchResult:
        return cls(url=url, ok=False, reason=reason, status=status)


@dataclass(slots=True, frozen=True)
class RobotsPolicy:
    """Wildcard user-agent rules taken from robots.txt."""

    disallow: Tuple[str, ...] = ()
    crawl_delay: int = 0

    @property
    def active(self) -> bool:
        return bool(self.disallow) or self.crawl_delay > 0

    @property
    def blocks_everything(self) -> bool:
        return self.active and "/" in self.disallow


@dataclass(slots=True)
class CrawlResult:
    """Everything the report writers need once a crawl is over."""

    seed_url: str
    domain: str
    max_visits: Optional[int]
    robots: RobotsPolicy = field(default_factory=RobotsPolicy)
    pages: Dict[str, List[str]] = field(default_factory=dict)
    unvisited: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)
    stopped: bool = False

    @property
    def limited(self) -> bool:
        return self.max_visits is not None
