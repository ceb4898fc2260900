# File: tests/test_cli.py
"""CLI tests (`site_mapper/cli.py`) through click.testing.CliRunner.
The crawl itself is patched out; see test_crawler.py for crawl behaviour.
"""
import importlib
import json

import pytest
from click.testing import CliRunner
from site_mapper.cli import cli
from site_mapper.crawler.errors import CrawlForbiddenError, InvalidSeedError
from site_mapper.crawler.models import CrawlResult
from site_mapper.logger import init_logging

# the package re-exports the click group under the same name as the module
cli_module = importlib.import_module("site_mapper.cli")


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI binds log handlers to CliRunner's streams; rebind them afterwards."""
    yield
    init_logging()


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Replace start_crawl with a fake that records the config it was given."""
    calls = []

    async def fake_crawl(cfg):
        calls.append(cfg)
        return CrawlResult(
            seed_url=cfg.seed_url,
            domain="http://example.com",
            max_visits=cfg.max_visits,
            pages={cfg.seed_url: ["http://example.com/a"]},
            unvisited=["http://example.com/a"],
        )

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return calls


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteMapper" in result.output


def test_show_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["seed_url"] == "http://hirespace.com"
    assert data["max_visits"] == 100


def test_default_config_file_is_picked_up(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "seed_url: https://example.co.uk\nmax_visits: 5\n", encoding="utf-8"
    )
    result = CliRunner().invoke(cli, ["config"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["seed_url"] == "https://example.co.uk"
    assert data["max_visits"] == 5


def test_show_config_from_file(tmp_path):
    cfg_file = tmp_path / "crawl.json"
    cfg_file.write_text(json.dumps({"seed_url": "https://example.com", "max_visits": None}), encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["seed_url"] == "https://example.com"
    assert data["max_visits"] is None


def test_invalid_config_file(tmp_path):
    cfg_file = tmp_path / "crawl.yaml"
    cfg_file.write_text("- not\n- a mapping", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_crawl_writes_sitemap(tmp_path, patch_start_crawl):
    out = tmp_path / "Sitemap.txt"
    result = CliRunner().invoke(cli, ["crawl", "http://example.com", "--output", str(out)])
    assert result.exit_code == 0, result.output
    text = out.read_text(encoding="utf-8")
    assert text.startswith("Sitemap from http://example.com")
    assert "-- http://example.com/a" in text
    assert "Sitemap saved in" in result.output
    assert patch_start_crawl[0].seed_url == "http://example.com"


def test_crawl_uses_default_seed(tmp_path, monkeypatch, patch_start_crawl):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["crawl", "-o", str(tmp_path / "s.txt")])
    assert result.exit_code == 0, result.output
    assert patch_start_crawl[0].seed_url == "http://hirespace.com"
    assert patch_start_crawl[0].max_visits == 100


def test_crawl_option_overrides(tmp_path, patch_start_crawl):
    result = CliRunner().invoke(
        cli,
        [
            "crawl", "https://example.com",
            "--unlimited", "--ignore-crawl-delay",
            "--concurrency", "3", "--scan-timeout", "5",
            "-o", str(tmp_path / "s.txt"),
        ],
    )
    assert result.exit_code == 0, result.output
    cfg = patch_start_crawl[0]
    assert cfg.max_visits is None
    assert cfg.observe_crawl_delay is False
    assert cfg.concurrency == 3
    assert cfg.scan_timeout == 5.0


def test_crawl_limit(tmp_path, patch_start_crawl):
    result = CliRunner().invoke(cli, ["crawl", "--limit", "7", "-o", str(tmp_path / "s.txt")])
    assert result.exit_code == 0, result.output
    assert patch_start_crawl[0].max_visits == 7
    assert "Limited to 7 requests" in (tmp_path / "s.txt").read_text(encoding="utf-8")


def test_limit_and_unlimited_conflict(tmp_path):
    result = CliRunner().invoke(cli, ["crawl", "--limit", "3", "--unlimited", "-o", str(tmp_path / "s.txt")])
    assert result.exit_code == 1
    assert "mutually exclusive" in result.output


def test_crawl_json_report(tmp_path):
    out = tmp_path / "s.txt"
    js = tmp_path / "s.json"
    result = CliRunner().invoke(cli, ["crawl", "http://example.com", "-o", str(out), "--json", str(js)])
    assert result.exit_code == 0, result.output
    data = json.loads(js.read_text(encoding="utf-8"))
    assert data["pages"][0]["url"] == "http://example.com"
    assert data["unvisited"] == ["http://example.com/a"]


@pytest.mark.parametrize(
    "error", [InvalidSeedError("ftp://example.com"), CrawlForbiddenError("http://example.com")]
)
def test_fatal_crawl_errors_exit_non_zero(tmp_path, monkeypatch, error):
    async def failing(cfg):
        raise error

    monkeypatch.setattr(cli_module, "start_crawl", failing)
    out = tmp_path / "s.txt"
    result = CliRunner().invoke(cli, ["crawl", "ftp://example.com", "-o", str(out)])
    assert result.exit_code == 1
    assert str(error) in result.output
    assert not out.exists()
