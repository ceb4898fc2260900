# File: tests/test_ledger.py
import pytest

from site_mapper.crawler.ledger import CrawlLedger


def test_offer_dedups_by_location():
    ledger = CrawlLedger()
    assert ledger.offer("http://a.com/x")
    assert not ledger.offer("http://a.com/x/")
    assert not ledger.offer("http://www.a.com/x")
    assert ledger.offer("http://a.com/y")
    assert list(ledger.frontier) == ["http://a.com/x", "http://a.com/y"]


def test_claim_is_fifo_and_tracks_in_flight():
    ledger = CrawlLedger()
    ledger.offer("http://a.com")
    ledger.offer("http://a.com/x")
    assert ledger.claim() == "http://a.com"
    assert ledger.in_flight == {"http://a.com"}
    assert list(ledger.frontier) == ["http://a.com/x"]
    # in flight still counts as known
    assert not ledger.offer("http://a.com/")


def test_record_moves_url_to_pages_and_dedups_children():
    ledger = CrawlLedger()
    ledger.offer("http://a.com")
    parent = ledger.claim()
    ledger.record(parent, ["http://a.com/x", "http://a.com/y", "http://a.com/x"])
    assert ledger.pages == {"http://a.com": ["http://a.com/x", "http://a.com/y"]}
    assert not ledger.in_flight
    assert not ledger.pending


def test_visited_url_is_never_requeued():
    ledger = CrawlLedger()
    ledger.offer("http://a.com/x")
    ledger.record(ledger.claim(), [])
    assert not ledger.offer("http://a.com/x")
    assert not ledger.offer("http://www.a.com/x/")
    assert "http://a.com/x" in ledger
    assert not ledger.frontier


def test_record_twice_is_rejected():
    ledger = CrawlLedger()
    ledger.offer("http://a.com")
    ledger.record(ledger.claim(), [])
    with pytest.raises(ValueError):
        ledger.record("http://a.com", [])


def test_record_removes_unclaimed_parent_from_frontier():
    ledger = CrawlLedger()
    ledger.offer("http://a.com")
    ledger.record("http://a.com", [], failure="timeout")
    assert not ledger.frontier
    assert ledger.failures == {"http://a.com": "timeout"}


def test_release_returns_claim_to_front():
    ledger = CrawlLedger()
    ledger.offer("http://a.com/1")
    ledger.offer("http://a.com/2")
    url = ledger.claim()
    ledger.release(url)
    assert ledger.remaining() == ["http://a.com/1", "http://a.com/2"]
    assert not ledger.in_flight
    # releasing something that is not in flight is a no-op
    ledger.release("http://a.com/1")
    assert ledger.remaining() == ["http://a.com/1", "http://a.com/2"]
