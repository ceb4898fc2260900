# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from site_mapper.config import CrawlConfig
from site_mapper.crawler.errors import CrawlForbiddenError, InvalidSeedError
from site_mapper.crawler.fetcher import CrawlDelayThrottle, Fetcher, PageFetcher
from site_mapper.crawler.ledger import CrawlLedger
from site_mapper.crawler.link_extractor import extract_links
from site_mapper.crawler.models import CrawlResult, FetchResult, RobotsPolicy
from site_mapper.crawler.robots import fetch_robots, is_disallowed
from site_mapper.crawler.urls import (
    domain_of,
    is_http_scheme,
    is_in_scope,
    registrable_label_of,
    sanitize,
)
from site_mapper.logger import LOGGER_NAME

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """
    Breadth-first crawler confined to the seed's registrable domain.

    All crawl state (ledger, robots policy, visit budget) belongs to the
    instance. Workers share it through one ``asyncio.Condition``; with the
    default single worker pages are fetched in discovery order.

    Pass *fetcher* to crawl through something other than aiohttp (tests do).
    """

    def __init__(self, config: CrawlConfig, fetcher: Optional[PageFetcher] = None) -> None:
        self.config = config
        self.fetcher = fetcher
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger(LOGGER_NAME)
        self.ledger = CrawlLedger()
        self.robots = RobotsPolicy()
        self.domain = ""
        self.label = ""
        # unlimited runs keep a budget of 1 that is never spent
        self._limited = config.limited
        self._remaining_visits = config.max_visits if config.max_visits is not None else 1
        self._cond = asyncio.Condition()
        self._stop = asyncio.Event()
        self._stopped = False
        self._throttle = CrawlDelayThrottle(0)

    async def __aenter__(self) -> SiteCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    def stop(self) -> None:
        """Stop issuing fetches; ``crawl()`` returns with what it has so far."""
        self._stop.set()

    async def crawl(self) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized")

        seed = self.config.seed_url
        if not is_http_scheme(seed):
            raise InvalidSeedError(seed)

        self.domain = domain_of(seed)
        self.robots = await fetch_robots(self.fetcher, self.domain)
        if self.robots.blocks_everything:
            raise CrawlForbiddenError(self.domain)

        self.label = registrable_label_of(self.domain)
        delay = self.robots.crawl_delay if self.config.observe_crawl_delay else 0
        self._throttle = CrawlDelayThrottle(delay)
        self.ledger.offer(sanitize(seed, self.domain))

        self.logger.info("Crawl started: %s (scope: '%s.')", seed, self.label)
        start = time.monotonic()
        await self._run_workers()
        duration = time.monotonic() - start
        self.logger.info(
            "Finished: %d pages in %.2f s, %d not visited",
            len(self.ledger.pages),
            duration,
            len(self.ledger.frontier),
        )
        if self.ledger.failures:
            self.logger.info("Failed fetches: %d", len(self.ledger.failures))
        return self._result()

    async def _run_workers(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = None if self.config.scan_timeout is None else loop.time() + self.config.scan_timeout
        workers = [asyncio.create_task(self._worker()) for _ in range(self.config.concurrency)]
        stop_waiter = asyncio.create_task(self._stop.wait())
        pending: Set[asyncio.Task] = set(workers)
        try:
            while pending:
                timeout = None if deadline is None else deadline - loop.time()
                if timeout is not None and timeout <= 0:
                    self.logger.warning(
                        "Crawl did not finish within %s seconds, stopping", self.config.scan_timeout
                    )
                    self._stopped = True
                    break
                done, pending = await asyncio.wait(
                    pending | {stop_waiter}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
                )
                if stop_waiter in done:
                    self.logger.warning("Crawl stopped, writing what has been found so far")
                    self._stopped = True
                    break
                pending.discard(stop_waiter)
                for task in done:
                    task.result()
        finally:
            stop_waiter.cancel()
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, stop_waiter, return_exceptions=True)

    async def _worker(self) -> None:
        while True:
            url = await self._next_url()
            if url is None:
                return
            recorded = False
            try:
                await self._throttle.wait()
                self.logger.info("fetching %s", url)
                result = await self.fetcher.fetch(url)
                if not result.ok:
                    self.logger.warning("Failed %s: %s", url, result.reason)
                raw_links = extract_links(result.body) if result.ok else []
                async with self._cond:
                    self._process_links(url, raw_links, result)
                    recorded = True
                    self._cond.notify_all()
            finally:
                if not recorded:
                    self.ledger.release(url)

    async def _next_url(self) -> Optional[str]:
        async with self._cond:
            while True:
                if self._stop.is_set() or self._remaining_visits <= 0:
                    return None
                if self.ledger.frontier:
                    if self._limited:
                        self._remaining_visits -= 1
                    return self.ledger.claim()
                if not self.ledger.in_flight:
                    self._cond.notify_all()
                    return None
                await self._cond.wait()

    def _process_links(self, parent: str, raw_links: List[str], result: FetchResult) -> None:
        """
        Classify the links found on *parent* and record the visit.

        In-scope links are always kept as children; only the ones robots.txt
        does not disallow are queued.
        """
        children: List[str] = []
        for raw in raw_links:
            candidate = sanitize(raw, self.domain)
            disallowed = False

            if self.robots.active:
                disallowed = is_disallowed(candidate, self.robots.disallow)
                if disallowed and is_in_scope(candidate, self.label):
                    children.append(candidate)

            if not disallowed and is_in_scope(candidate, self.label):
                children.append(candidate)
                self.ledger.offer(candidate)

        self.ledger.record(parent, children, failure=None if result.ok else result.reason)

    def _result(self) -> CrawlResult:
        return CrawlResult(
            seed_url=self.config.seed_url,
            domain=self.domain,
            max_visits=self.config.max_visits,
            robots=self.robots,
            pages=dict(self.ledger.pages),
            unvisited=self.ledger.remaining(),
            failures=dict(self.ledger.failures),
            stopped=self._stopped,
        )
