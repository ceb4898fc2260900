# File: site_mapper/report/text_report.py
"""site_mapper.report.text_report: plain-text sitemap rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_mapper.crawler.models import CrawlResult

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "sitemap.txt.j2"


def render_text(result: CrawlResult, template_dir: Union[Path, str, None] = None) -> str:
    """Return the sitemap text: every visited URL with its links, then the unvisited ones."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    return env.get_template(TEMPLATE_NAME).render(result=result)


def write_text(
    result: CrawlResult,
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
) -> Path:
    """Render the sitemap and save it to *output_path*.

    Example:
    ```python
    from site_mapper.report.text_report import write_text
    path = write_text(result, "Sitemap.txt")
    ```
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_text(result, template_dir), encoding="utf-8")
    return output_path
