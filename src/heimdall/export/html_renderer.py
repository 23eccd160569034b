"""
HTML renderer.

Produces one self-contained HTML5 page: inline stylesheet (with a dark mode
variant), a grouped table of contents and the body. Headings are recorded as
they are added and grouped into TOC rows when the page is finalized. JSON
bodies are colorized with the span classes emitted by
heimdall.export.json_printer; every other piece of text is escaped.
"""

import dataclasses as _dataclasses
import html as _html
import io as _io
import typing as _typing

import heimdall.constants as _constants
import heimdall.export.formatting as formatting
import heimdall.export.json_printer as json_printer
import heimdall.summary.types as summary_types

TOC_SEPARATOR = " · "

STYLESHEET = """<style>
  body {
    font: 400 16px/1.55 -apple-system, BlinkMacSystemFont, "SF Pro Text", "Helvetica Neue", Helvetica, Arial, sans-serif;
    background-color: #FDFDFD;
    color: #353535;
  }
  pre {
    font-family: "SF Mono", Menlo, Consolas, "Liberation Mono", Courier, monospace;
    font-size: 14px;
    padding: 8px;
    border-radius: 8px;
    background-color: #F3F3F3;
    overflow-x: auto;
  }
  h2 {
    margin-top: 30px;
    padding-bottom: 8px;
    border-bottom: 2px solid #DDDDDD;
    font-weight: 600;
    font-size: 34px;
  }
  ul {
    list-style: none;
    padding-left: 0;
  }
  li {
    overflow-wrap: break-word;
  }
  strong {
    font-weight: 600;
    color: #737373;
  }
  main {
    max-width: 900px;
    padding: 15px;
  }
  a {
    color: #0066FF;
  }
  .s { color: rgb(255, 45, 85); }
  .o { color: rgb(0, 122, 255); }
  .n { color: rgb(191, 90, 242); }
  @media (prefers-color-scheme: dark) {
    body {
      background-color: #211F1E;
      color: #DFDFDF;
    }
    strong {
      color: #878787;
    }
    h2 {
      border-bottom: 2px solid #3C3A38;
    }
    pre {
      background-color: #2C2A28;
    }
    a {
      color: #67A6F8;
    }
    .s { color: rgb(255, 55, 95); }
    .o { color: rgb(10, 132, 255); }
    .n { color: rgb(175, 82, 222); }
  }
</style>"""


@_dataclasses.dataclass(frozen=True)
class HeadingRecord:
    """A heading added to the page: level 2 (primary) or 3 (secondary)."""

    level: _typing.Literal[2, 3]
    title: str


def group_toc_rows(headings: _typing.Sequence[HeadingRecord]) -> list[list[HeadingRecord]]:
    """
    Group headings into TOC rows.

    A row starts at a heading and absorbs every level-3 heading that
    immediately follows it.
    """
    rows: list[list[HeadingRecord]] = []
    index = 0
    while index < len(headings):
        row = [headings[index]]
        index += 1
        while index < len(headings) and headings[index].level == 3:
            row.append(headings[index])
            index += 1
        rows.append(row)
    return rows


def _link(title: str) -> str:
    anchor = _html.escape(formatting.anchor_for(title))
    return f"<a href='#{anchor}'>{_html.escape(title)}</a>"


class HTMLRenderer:
    """Renders an export as a self-contained HTML page."""

    def __init__(self) -> None:
        self._contents = _io.StringIO()
        self._headings: list[HeadingRecord] = []

    @property
    def headings(self) -> tuple[HeadingRecord, ...]:
        """Headings added so far, in order."""
        return tuple(self._headings)

    def add_heading(self, title: str) -> None:
        self._add_heading(HeadingRecord(level=2, title=title))

    def add_sub_heading(self, title: str) -> None:
        self._add_heading(HeadingRecord(level=3, title=title))

    def _add_heading(self, heading: HeadingRecord) -> None:
        self._headings.append(heading)
        anchor = _html.escape(formatting.anchor_for(heading.title))
        self._contents.write(
            f"<h{heading.level} id='{anchor}'>{_html.escape(heading.title)}</h{heading.level}>\n"
        )

    def add_data(self, data: bytes) -> None:
        self._contents.write("<pre><code>")
        value = formatting.parse_json(data)
        if value is not None:
            writer = json_printer.HTMLTokenWriter(self._contents.write)
            json_printer.JSONPrinter(writer).print(value)
        else:
            text = formatting.decode_text(data)
            self._contents.write(
                _html.escape(text if text is not None else formatting.describe_data(data))
            )
        self._contents.write("</code></pre>\n")

    def add_key_value_section(
        self,
        section: summary_types.KeyValueSection | None,
        as_sub_heading: bool,
    ) -> None:
        if section is None:
            return
        if as_sub_heading:
            self.add_sub_heading(section.title)
        else:
            self.add_heading(section.title)
        if not section.items:
            self._contents.write(f"<p>{_constants.EMPTY_SECTION_TEXT}</p>\n")
            return
        self._contents.write("<ul>\n")
        for key, value in section.items:
            shown = value if value is not None else _constants.MISSING_VALUE_PLACEHOLDER
            self._contents.write(
                f"<li><strong>{_html.escape(key)}</strong>: {_html.escape(shown)}</li>\n"
            )
        self._contents.write("</ul>\n")

    def make_toc(self) -> str:
        """Table of contents, one <li> per primary heading."""
        if not self._headings:
            return ""
        output = ["<ul>"]
        for head, *tail in group_toc_rows(self._headings):
            item = f"<li><strong>{_link(head.title)}</strong>"
            if tail:
                item += ": " + TOC_SEPARATOR.join(_link(sub.title) for sub in tail)
            output.append(item + "</li>")
        output.append("</ul>")
        return "\n".join(output)

    def finalize(self, title: str) -> str:
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="utf-8">\n'
            '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
            f"<title>{_html.escape(title)}</title>\n"
            f"{STYLESHEET}\n"
            "</head>\n"
            "<body>\n"
            "<main>\n"
            f"{self.make_toc()}\n"
            f"{self._contents.getvalue()}"
            "</main>\n"
            "</body>\n"
            "</html>\n"
        )
