# site_mapper/crawler/fetcher.py
"""
Fetcher module: one GET per call, failures reported as values, plus the
crawl-delay throttle shared by all crawler workers.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Protocol

from aiohttp import ClientError, ClientSession

from site_mapper.crawler.models import FetchResult
from site_mapper.logger import LOGGER_NAME

__all__ = ("PageFetcher", "Fetcher", "CrawlDelayThrottle")

logger = logging.getLogger(LOGGER_NAME)


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchResult: ...


class Fetcher:
    """Issues plain GET requests through an aiohttp session. Never raises for I/O errors."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch *url* once.

        Returns ``FetchResult.success`` for 2xx responses and
        ``FetchResult.failure`` for anything else (non-2xx, timeout, DNS or
        connection errors, malformed URL). No retries.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if not 200 <= resp.status < 300:
                    return FetchResult.failure(url, f"HTTP {resp.status}", status=resp.status)
                text = await resp.text(errors="replace")
                return FetchResult.success(url, text, status=resp.status)
        except asyncio.TimeoutError:
            return FetchResult.failure(url, "timeout")
        except (ClientError, ValueError) as exc:
            return FetchResult.failure(url, f"{type(exc).__name__}: {exc}")


class CrawlDelayThrottle:
    """
    Minimum spacing between fetch issuances, shared by every worker.

    The clock starts when the throttle is created, so the first fetch after
    robots.txt is processed waits a full interval as well.
    """

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self._lock = asyncio.Lock()
        self._last_request_ts = time.monotonic()

    async def wait(self) -> None:
        if self.interval <= 0:
            return
        async with self._lock:
            wait = self.interval - (time.monotonic() - self._last_request_ts)
            if wait > 0:
                logger.info(
                    "waiting for %.2f seconds to observe robots.txt 'Crawl-delay' directive", wait
                )
                await asyncio.sleep(wait)
            self._last_request_ts = time.monotonic()
