# site_mapper/crawler/urls.py
"""
URL identity rules for SiteMapper.

Everything here works on plain strings: hrefs pulled out of HTML are noisy
and the crawler compares them textually, so no ``urlparse`` round-trips that
could raise or silently rewrite the input.
"""
from __future__ import annotations

import re
from typing import Final

__all__ = (
    "domain_of",
    "registrable_label_of",
    "is_http_scheme",
    "is_https",
    "is_relative_path",
    "sanitize",
    "location_key",
    "same_location",
    "host_of",
    "is_in_scope",
)

_SCHEME_WWW_RE: Final = re.compile(r"^(https?://)?(www\.)?")
_PATH_RE: Final = re.compile(r"/.*", re.DOTALL)
_HTTP_RE: Final = re.compile(r"^https?://")
_HTTPS_RE: Final = re.compile(r"^https://")
_ESCAPE_RE: Final = re.compile(r"\\\w")
_PORT_RE: Final = re.compile(r":\d+$")
_DOT_COM_RE: Final = re.compile(r"\.com$")
_DOT_UK_RE: Final = re.compile(r"\.uk$")
_UK_SUFFIX_RE: Final = re.compile(r"\.[a-zA-Z]*\.uk$")
_LABEL_RE: Final = re.compile(r"[a-zA-Z-]*$")
_HOST_RE: Final = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://([^/?#]*)")
_LEADING_WWW_RE: Final = re.compile(r"^((?:https?://)?)www\.")


def domain_of(url: str) -> str:
    """Return ``scheme://host`` of *url* with any ``www.`` prefix and path removed."""
    scheme = _SCHEME_WWW_RE.match(url).group(1) or ""
    rest = _SCHEME_WWW_RE.sub("", url, count=1)
    return f"{scheme}{_PATH_RE.sub('', rest)}"


def registrable_label_of(domain: str) -> str:
    """
    Return the owner-controlled label of *domain*.

    Only ``.com`` and ``.uk`` hosts are understood: ``example.com`` and
    ``example.co.uk`` both give ``example``. Any other shape is returned
    unchanged, which keeps the crawl on the seed page only. A name that
    ends in a digit before the suffix (``site2.com``) gives an empty label;
    every http(s) host with a dot is then in scope.
    """
    host = _PORT_RE.sub("", domain)
    if _DOT_COM_RE.search(host):
        return _LABEL_RE.search(_DOT_COM_RE.sub("", host)).group(0)
    if _DOT_UK_RE.search(host):
        return _LABEL_RE.search(_UK_SUFFIX_RE.sub("", host)).group(0)
    return domain


def is_http_scheme(url: str) -> bool:
    return bool(_HTTP_RE.match(url))


def is_https(url: str) -> bool:
    return bool(_HTTPS_RE.match(url))


def is_relative_path(url: str) -> bool:
    return url.startswith("/")


def sanitize(raw_href: str, base_url: str) -> str:
    """
    Strip backslash escapes left over from HTML extraction and resolve
    root-relative hrefs against *base_url*.

    ``../``, query strings and fragments are left alone.
    """
    url = _ESCAPE_RE.sub("", raw_href)
    if is_relative_path(url):
        return f"{base_url}{url}"
    return url


def location_key(url: str) -> str:
    """Comparison key: one trailing slash trimmed, leading ``www.`` dropped."""
    if url.endswith("/"):
        url = url[:-1]
    return _LEADING_WWW_RE.sub(r"\1", url, count=1)


def same_location(a: str, b: str) -> bool:
    return location_key(a) == location_key(b)


def host_of(url: str) -> str:
    """Return the ``host[:port]`` part of an absolute URL, ``""`` otherwise."""
    match = _HOST_RE.match(url)
    return match.group(1) if match else ""


def is_in_scope(url: str, label: str) -> bool:
    """True for http(s) URLs whose host contains ``"{label}."``."""
    return is_http_scheme(url) and f"{label}." in host_of(url)
