# site_mapper/crawler/link_extractor.py
"""
Anchor extraction for SiteMapper.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag


def extract_links(html: str) -> List[str]:
    """
    Return the raw ``href`` of every ``<a>`` element, in document order.

    Values are not normalized. ``html.parser`` is tolerant of broken markup,
    so malformed pages give whatever anchors are recognisable.
    """
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str):
            links.append(href_val)
    return links
