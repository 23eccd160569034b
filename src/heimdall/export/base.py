"""
Renderer protocol for document export.

Every output format implements the same small set of operations:
- PlainTextRenderer - "##"/"####" line markers, no table of contents
- MarkdownRenderer - link table of contents, fenced code blocks
- HTMLRenderer - self-contained HTML5 page with colorized JSON

The export driver issues the same ordered calls into whichever renderer was
selected, which keeps the three documents semantically equivalent. A renderer
is stateful: create one per export, call finalize() once, then discard it.
"""

import typing as _typing

import heimdall.summary.types as summary_types


@_typing.runtime_checkable
class Renderer(_typing.Protocol):
    """Accumulates one document in a single pass."""

    def add_heading(self, title: str) -> None:
        """Start a primary section."""
        ...

    def add_sub_heading(self, title: str) -> None:
        """Start a secondary section under the current primary one."""
        ...

    def add_data(self, data: bytes) -> None:
        """
        Add a body payload.

        JSON is pretty-printed; other UTF-8 text is added as is; anything
        else is replaced by a byte-count placeholder ("Data: 3.2 KB").
        """
        ...

    def add_key_value_section(
        self,
        section: summary_types.KeyValueSection | None,
        as_sub_heading: bool,
    ) -> None:
        """
        Add a titled section.

        Args:
            section: The section, or None to add nothing.
            as_sub_heading: Title the section with a sub-heading (True) or a
                primary heading (False).
        """
        ...

    def finalize(self, title: str) -> str:
        """Return the finished document."""
        ...


def add_section(
    renderer: Renderer,
    section: summary_types.KeyValueSection | None,
) -> None:
    """Add a section under a sub-heading."""
    renderer.add_key_value_section(section, as_sub_heading=True)
