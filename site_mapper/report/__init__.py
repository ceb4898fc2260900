# File: site_mapper/report/__init__.py
"""site_mapper.report: sitemap writers (text and JSON) used by the CLI and tests."""

from site_mapper.report.json_report import render_json, result_to_dict
from site_mapper.report.text_report import render_text, write_text

__all__ = ["render_json", "result_to_dict", "render_text", "write_text"]
