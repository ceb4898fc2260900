# File: site_mapper/engine.py
"""site_mapper.engine: runs one crawl with signal handling for the CLI."""

from __future__ import annotations

import asyncio
import signal
from typing import Optional

from site_mapper.config import CrawlConfig
from site_mapper.crawler.crawler import SiteCrawler
from site_mapper.crawler.fetcher import PageFetcher
from site_mapper.crawler.models import CrawlResult
from site_mapper.logger import logger

__all__ = ["start_crawl"]

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install_stop_handlers(crawler: SiteCrawler) -> list[signal.Signals]:
    """Route SIGINT/SIGTERM to ``crawler.stop``. Returns the signals that were hooked."""
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []
    for sig in _STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, crawler.stop)
        except (NotImplementedError, RuntimeError, ValueError):
            # not available on this platform or outside the main thread
            logger.debug("Cannot install handler for %s", sig.name)
            continue
        installed.append(sig)
    return installed


async def start_crawl(cfg: CrawlConfig, fetcher: Optional[PageFetcher] = None) -> CrawlResult:
    """
    Crawl from ``cfg.seed_url`` and return the result.

    An interrupt or ``cfg.scan_timeout`` ends the crawl early but still
    returns the pages visited so far.
    """
    logger.info("Starting crawl…")
    async with SiteCrawler(cfg, fetcher=fetcher) as crawler:
        installed = _install_stop_handlers(crawler)
        try:
            return await crawler.crawl()
        finally:
            loop = asyncio.get_running_loop()
            for sig in installed:
                loop.remove_signal_handler(sig)
