"""
Export module for Heimdall.

Turns a Summary into a finished document. Renderers share one protocol:
- PlainTextRenderer - "##"/"####" markers, no links
- MarkdownRenderer - link table of contents, fenced code blocks
- HTMLRenderer - self-contained page, colorized JSON, dark mode
"""

from heimdall.export.base import Renderer, add_section
from heimdall.export.driver import (
    ExportFormat,
    as_html,
    as_markdown,
    as_plain_text,
    create_renderer,
    export_summary,
    render_summary,
)
from heimdall.export.formatting import anchor_for, format_byte_count
from heimdall.export.html_renderer import HTMLRenderer
from heimdall.export.json_printer import JSONPrinter, format_json
from heimdall.export.markdown_renderer import MarkdownRenderer
from heimdall.export.plain import PlainTextRenderer

__all__ = [
    # Protocol and helpers
    "Renderer",
    "add_section",
    "anchor_for",
    "format_byte_count",
    # Renderers
    "PlainTextRenderer",
    "MarkdownRenderer",
    "HTMLRenderer",
    # JSON
    "JSONPrinter",
    "format_json",
    # Driver
    "ExportFormat",
    "as_html",
    "as_markdown",
    "as_plain_text",
    "create_renderer",
    "export_summary",
    "render_summary",
]
