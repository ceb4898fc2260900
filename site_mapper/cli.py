# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for SiteMapper.

Commands:
  crawl     Crawl a site from SEED_URL and write the sitemap report
  config    Show the effective configuration

Global options:
  --config PATH       YAML/JSON config file (default: configs/default.yaml
                      when present, otherwise built-in defaults)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format string

crawl options:
  SEED_URL              Start page (falls back to the configured seed)
  --limit N             Visit at most N pages
  --unlimited           Crawl until the frontier is empty
  --ignore-crawl-delay  Do not wait for robots.txt Crawl-delay
  --concurrency N       Pages fetched at the same time
  --scan-timeout SEC    Stop the crawl after SEC seconds and report what was found
  --output PATH         Text sitemap (default: Sitemap.txt)
  --json PATH           Also save a JSON report

Example:
  site-mapper crawl https://example.com --limit 50 --json sitemap.json
"""
import sys
import asyncio
from pathlib import Path

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import DEFAULT_CONFIG_PATH, CrawlConfig, load_config
from site_mapper.crawler.errors import CrawlError
from site_mapper.logger import init_logging
from site_mapper.engine import start_crawl
from site_mapper.report.json_report import render_json
from site_mapper.report.text_report import write_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON configuration file (default: configs/default.yaml if present).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMapper command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        if config_path or DEFAULT_CONFIG_PATH.exists():
            cfg = load_config(config_path)
        else:
            cfg = CrawlConfig()
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed_url', required=False)
@click.option('--limit', '-l', 'limit', type=click.IntRange(min=1), default=None,
              help='Visit at most this many pages')
@click.option('--unlimited', is_flag=True, help='Crawl until no unvisited pages remain')
@click.option('--ignore-crawl-delay', is_flag=True, help="Ignore robots.txt 'Crawl-delay'")
@click.option('--concurrency', type=click.IntRange(min=1), default=None,
              help='Pages fetched at the same time')
@click.option('--scan-timeout', 'scan_timeout', type=float, default=None,
              help='Stop the crawl after this many seconds')
@click.option(
    '--output', '-o', 'output',
    default='Sitemap.txt', show_default=True,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Text sitemap file'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also save a JSON report'
)
@click.pass_context
def crawl(ctx, seed_url, limit, unlimited, ignore_crawl_delay, concurrency, scan_timeout,
          output, json_output):
    """Crawl a site and write its sitemap."""
    if limit is not None and unlimited:
        print_error('--limit and --unlimited are mutually exclusive')

    overrides = {}
    if seed_url:
        overrides['seed_url'] = seed_url
    if limit is not None:
        overrides['max_visits'] = limit
    if unlimited:
        overrides['max_visits'] = None
    if ignore_crawl_delay:
        overrides['observe_crawl_delay'] = False
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    if scan_timeout is not None:
        overrides['scan_timeout'] = scan_timeout

    try:
        cfg = CrawlConfig(**{**ctx.obj['config'].model_dump(), **overrides})
    except ValidationError as e:
        print_error(f'Invalid settings: {e}')

    click.echo(f'Starting crawl from {cfg.seed_url}')
    try:
        result = asyncio.run(start_crawl(cfg))
    except CrawlError as e:
        print_error(str(e))

    try:
        saved = write_text(result, output)
        click.echo(f'Sitemap saved in {saved}')
        if json_output:
            saved_json = render_json(result, json_output)
            click.echo(f'JSON report: {saved_json}')
    except OSError as e:
        print_error(f'Failed to save report: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
