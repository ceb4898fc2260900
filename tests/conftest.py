# File: tests/conftest.py
from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from site_mapper.config import CrawlConfig
from site_mapper.crawler.models import FetchResult


class FakeFetcher:
    """
    In-memory stand-in for ``Fetcher``.

    *pages* maps URL -> HTML body; a value of ``None`` or a missing URL is a
    failed fetch. Every requested URL is appended to ``calls``.
    """

    def __init__(self, pages: Optional[Dict[str, Optional[str]]] = None) -> None:
        self.pages = dict(pages or {})
        self.calls: List[str] = []

    async def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        body = self.pages.get(url)
        if body is None:
            return FetchResult.failure(url, "HTTP 404", status=404)
        return FetchResult.success(url, body)

    @property
    def page_calls(self) -> List[str]:
        return [u for u in self.calls if not u.endswith("/robots.txt")]


def links_page(*hrefs: str) -> str:
    """Minimal HTML page with one anchor per href."""
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


@pytest.fixture()
def make_config():
    """
    Build a CrawlConfig with test-friendly defaults (no crawl delay, unlimited).
    """
    def _make(seed_url: str = "http://a.com", **overrides) -> CrawlConfig:
        params = {
            "seed_url": seed_url,
            "observe_crawl_delay": False,
            "max_visits": None,
            "timeout": 2.0,
            "user_agent": "TestAgent/1.0",
        }
        params.update(overrides)
        return CrawlConfig(**params)

    return _make
