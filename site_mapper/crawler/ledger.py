# site_mapper/crawler/ledger.py
"""
Frontier and visited bookkeeping.

A URL moves Unseen -> Frontier -> in flight -> Visited and never back, with
one exception: a claimed URL whose fetch is abandoned (crawl stopped) is
released to the front of the frontier. Identity is ``location_key``, so
``http://www.x.com/`` and ``http://x.com`` are one location.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Set

from site_mapper.crawler.urls import location_key

__all__ = ("CrawlLedger",)


class CrawlLedger:
    def __init__(self) -> None:
        self.frontier: Deque[str] = deque()
        self.pages: Dict[str, List[str]] = {}
        self.failures: Dict[str, str] = {}
        self.in_flight: Set[str] = set()
        self._known: Set[str] = set()

    def __contains__(self, url: str) -> bool:
        return location_key(url) in self._known

    def offer(self, url: str) -> bool:
        """Queue *url* unless its location is already queued, in flight or visited."""
        key = location_key(url)
        if key in self._known:
            return False
        self._known.add(key)
        self.frontier.append(url)
        return True

    def claim(self) -> str:
        """Pop the oldest frontier entry and mark it in flight."""
        url = self.frontier.popleft()
        self.in_flight.add(url)
        return url

    def release(self, url: str) -> None:
        """Return an unfinished claim to the front of the frontier."""
        if url in self.in_flight:
            self.in_flight.discard(url)
            self.frontier.appendleft(url)

    def record(self, parent: str, children: Iterable[str], failure: Optional[str] = None) -> None:
        """Store the visit of *parent*. Each URL is recorded at most once."""
        if parent in self.pages:
            raise ValueError(f"{parent} has already been visited")
        self.in_flight.discard(parent)
        if parent in self.frontier:
            self.frontier.remove(parent)
        self._known.add(location_key(parent))
        self.pages[parent] = list(dict.fromkeys(children))
        if failure is not None:
            self.failures[parent] = failure

    @property
    def pending(self) -> bool:
        """True while there is queued or in-flight work."""
        return bool(self.frontier) or bool(self.in_flight)

    def remaining(self) -> List[str]:
        return list(self.frontier)
