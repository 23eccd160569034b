"""
Export driver.

Walks a Summary and issues the same ordered sequence of calls into whichever
renderer was selected, so every format shows the same sections in the same
order. A fresh renderer is created for every export; a Summary may be shared
between concurrent exports because it is never mutated.
"""

import enum as _enum
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import heimdall.constants as _constants
import heimdall.export.base as base
import heimdall.export.formatting as formatting
import heimdall.export.html_renderer as html_renderer
import heimdall.export.markdown_renderer as markdown_renderer
import heimdall.export.plain as plain
import heimdall.summary.types as summary_types

_logger = _logging.getLogger(__name__)


class ExportFormat(str, _enum.Enum):
    """Supported document formats."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"

    @property
    def suffix(self) -> str:
        """File name suffix for documents in this format."""
        return _SUFFIXES[self]

    @classmethod
    def from_path(cls, path: _pathlib.Path | str) -> "ExportFormat | None":
        """Guess the format from a file name suffix, or None if unknown."""
        suffix = _pathlib.Path(path).suffix.lower()
        for export_format, known in _SUFFIXES.items():
            if suffix == known or suffix in _SUFFIX_ALIASES.get(export_format, ()):
                return export_format
        return None


_SUFFIXES: dict[ExportFormat, str] = {
    ExportFormat.TEXT: ".txt",
    ExportFormat.MARKDOWN: ".md",
    ExportFormat.HTML: ".html",
}

_SUFFIX_ALIASES: dict[ExportFormat, tuple[str, ...]] = {
    ExportFormat.TEXT: (".text", ".log"),
    ExportFormat.MARKDOWN: (".markdown",),
    ExportFormat.HTML: (".htm",),
}

_RENDERERS: dict[ExportFormat, _typing.Callable[[], base.Renderer]] = {
    ExportFormat.TEXT: plain.PlainTextRenderer,
    ExportFormat.MARKDOWN: markdown_renderer.MarkdownRenderer,
    ExportFormat.HTML: html_renderer.HTMLRenderer,
}


def create_renderer(export_format: ExportFormat | str) -> base.Renderer:
    """Create a new renderer for a format."""
    return _RENDERERS[ExportFormat(export_format)]()


def make_transfer_section(
    transfer: summary_types.TransferSizes,
) -> summary_types.KeyValueSection:
    """The "Sent Data" section: six byte counts, sent first."""
    return summary_types.KeyValueSection(
        title=_constants.TRANSFER_SECTION_TITLE,
        color=summary_types.SectionColor.GRAY,
        items=tuple(
            (label, formatting.format_byte_count(count)) for label, count in transfer.rows()
        ),
    )


def render_summary(
    summary: summary_types.Summary,
    renderer: base.Renderer,
    *,
    title: str = _constants.DEFAULT_DOCUMENT_TITLE,
) -> str:
    """
    Drive a renderer through a summary and finalize it.

    The renderer must be fresh; it is finalized here and must not be reused.
    """
    renderer.add_key_value_section(summary.overview, as_sub_heading=False)
    renderer.add_key_value_section(summary.error, as_sub_heading=False)

    renderer.add_heading(_constants.REQUEST_HEADING)
    base.add_section(renderer, summary.request_headers)
    if summary.request_body:
        renderer.add_sub_heading(_constants.REQUEST_BODY_HEADING)
        renderer.add_data(summary.request_body)

    renderer.add_heading(_constants.RESPONSE_HEADING)
    base.add_section(renderer, summary.response_headers)
    if summary.response_body:
        renderer.add_sub_heading(_constants.RESPONSE_BODY_HEADING)
        renderer.add_data(summary.response_body)

    renderer.add_heading(_constants.DETAILS_HEADING)
    base.add_section(renderer, summary.timing)
    if summary.transfer is not None:
        base.add_section(renderer, make_transfer_section(summary.transfer))
    base.add_section(renderer, summary.parameters)

    return renderer.finalize(title)


def export_summary(
    summary: summary_types.Summary,
    export_format: ExportFormat | str = ExportFormat.TEXT,
    *,
    title: str = _constants.DEFAULT_DOCUMENT_TITLE,
) -> str:
    """
    Export a summary as a complete document.

    Args:
        summary: The exchange to export.
        export_format: Target format (ExportFormat or its string value).
        title: Document title passed to the renderer.

    Returns:
        The finished document.

    Raises:
        ValueError: If export_format is not a known format.
    """
    export_format = ExportFormat(export_format)
    _logger.debug("Exporting summary as %s", export_format.value)
    document = render_summary(summary, create_renderer(export_format), title=title)
    _logger.debug("Exported %d characters as %s", len(document), export_format.value)
    return document


def as_plain_text(summary: summary_types.Summary) -> str:
    """Export a summary as plain text."""
    return export_summary(summary, ExportFormat.TEXT)


def as_markdown(summary: summary_types.Summary) -> str:
    """Export a summary as Markdown."""
    return export_summary(summary, ExportFormat.MARKDOWN)


def as_html(summary: summary_types.Summary) -> str:
    """Export a summary as a self-contained HTML page."""
    return export_summary(summary, ExportFormat.HTML)
