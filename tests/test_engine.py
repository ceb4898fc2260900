# File: tests/test_engine.py
import pytest

from conftest import FakeFetcher, links_page
from site_mapper.crawler.errors import InvalidSeedError
from site_mapper.engine import start_crawl


@pytest.mark.asyncio()
async def test_start_crawl_returns_result(make_config):
    fetcher = FakeFetcher({"http://a.com": links_page("/x"), "http://a.com/x": links_page("/")})
    result = await start_crawl(make_config(), fetcher=fetcher)

    assert result.seed_url == "http://a.com"
    assert list(result.pages) == ["http://a.com", "http://a.com/x"]
    assert not result.stopped


@pytest.mark.asyncio()
async def test_start_crawl_propagates_fatal_errors(make_config):
    fetcher = FakeFetcher()
    with pytest.raises(InvalidSeedError):
        await start_crawl(make_config("ftp://a.com"), fetcher=fetcher)
    assert fetcher.calls == []
