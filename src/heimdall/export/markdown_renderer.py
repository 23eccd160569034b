"""
Markdown renderer.

Builds the table of contents and the body in the same pass: every heading
appends a link to the TOC buffer and the heading itself to the body buffer.
Each body heading is preceded by an ``<a id="...">`` tag carrying the same
anchor the TOC links to.
"""

import io as _io

import heimdall.constants as _constants
import heimdall.export.formatting as formatting
import heimdall.export.json_printer as json_printer
import heimdall.summary.types as summary_types


class MarkdownRenderer:
    """Renders an export as a Markdown document with a table of contents."""

    def __init__(self) -> None:
        self._toc = _io.StringIO()
        self._contents = _io.StringIO()
        self._has_toc_entries = False

    def add_heading(self, title: str) -> None:
        anchor = formatting.anchor_for(title)
        if self._has_toc_entries:
            self._toc.write("\n")
        self._toc.write(f"- [**{title}**]({anchor})")
        self._has_toc_entries = True
        self._write_heading("##", title, anchor)

    def add_sub_heading(self, title: str) -> None:
        anchor = formatting.anchor_for(title)
        if self._has_toc_entries:
            self._toc.write("\n")
        self._toc.write(f"  - [{title}]({anchor})")
        self._has_toc_entries = True
        self._write_heading("####", title, anchor)

    def _write_heading(self, marker: str, title: str, anchor: str) -> None:
        self._contents.write(f'<a id="{anchor}"></a>\n{marker} {title}\n\n')

    def add_data(self, data: bytes) -> None:
        value = formatting.parse_json(data)
        if value is not None:
            self._contents.write("```json\n")
            writer = json_printer.TextTokenWriter(self._contents.write)
            json_printer.JSONPrinter(writer).print(value)
        else:
            self._contents.write("```\n")
            text = formatting.decode_text(data)
            self._contents.write(text if text is not None else formatting.describe_data(data))
        self._contents.write("\n```\n\n")

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
            self._contents.write(f"{_constants.EMPTY_SECTION_TEXT}\n")
        else:
            for key, value in section.items:
                shown = value if value is not None else _constants.MISSING_VALUE_PLACEHOLDER
                self._contents.write(f"- **{key}**: {shown}\n")
        self._contents.write("\n")

    def finalize(self, title: str) -> str:
        return f"# {title}\n\n{self._toc.getvalue()}\n\n{self._contents.getvalue()}"
