# site_mapper/report/json_report.py

"""
JSON report for SiteMapper.

Serializes a CrawlResult to a file.
"""
import json
from pathlib import Path
from typing import Any, Dict

from site_mapper.crawler.models import CrawlResult


def result_to_dict(result: CrawlResult) -> Dict[str, Any]:
    return {
        "seed_url": result.seed_url,
        "domain": result.domain,
        "max_visits": result.max_visits,
        "stopped": result.stopped,
        "robots": {
            "disallow": list(result.robots.disallow),
            "crawl_delay": result.robots.crawl_delay,
        },
        "pages": [
            {"url": url, "link_count": len(children), "links": children}
            for url, children in result.pages.items()
        ],
        "unvisited": result.unvisited,
        "failures": result.failures,
    }


def render_json(result: CrawlResult, output_path: Path | str) -> Path:
    """
    Save *result* as JSON at *output_path*.

    :param result: finished crawl
    :param output_path: path of the JSON file
    :return: Path of the saved file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result_to_dict(result), f, ensure_ascii=False, indent=2)

    return output
