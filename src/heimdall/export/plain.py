"""
Plain text renderer.

Outputs simple text with lightweight "##"/"####" heading markers and
"- key: value" rows. No links, no table of contents.
"""

import io as _io

import heimdall.constants as _constants
import heimdall.export.formatting as formatting
import heimdall.export.json_printer as json_printer
import heimdall.summary.types as summary_types


class PlainTextRenderer:
    """Renders an export as plain text."""

    def __init__(self) -> None:
        self._contents = _io.StringIO()

    def add_heading(self, title: str) -> None:
        self._contents.write(f"## {title}\n\n")

    def add_sub_heading(self, title: str) -> None:
        self._contents.write(f"#### {title}\n\n")

    def add_data(self, data: bytes) -> None:
        value = formatting.parse_json(data)
        if value is not None:
            writer = json_printer.TextTokenWriter(self._contents.write)
            json_printer.JSONPrinter(writer).print(value)
        else:
            text = formatting.decode_text(data)
            self._contents.write(text if text is not None else formatting.describe_data(data))
        self._contents.write("\n\n")

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
                self._contents.write(f"- {key}: {shown}\n")
        self._contents.write("\n")

    def finalize(self, title: str) -> str:  # noqa: ARG002
        """Return the body; plain text exports carry no document title."""
        return self._contents.getvalue()
