"""Tests for the plain text, Markdown and HTML renderers."""

import pytest as _pytest

import heimdall.export as export
import heimdall.export.html_renderer as html_renderer
import heimdall.summary as summary

ALL_RENDERERS = [export.PlainTextRenderer, export.MarkdownRenderer, export.HTMLRenderer]


def _section(*items: tuple[str, str | None], title: str = "Headers") -> summary.KeyValueSection:
    return summary.KeyValueSection(title=title, color=summary.SectionColor.RED, items=items)


class TestRendererProtocol:
    """Behavior shared by every renderer."""

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_implements_protocol(self, renderer_cls) -> None:
        assert isinstance(renderer_cls(), export.Renderer)

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_missing_section_adds_nothing(self, renderer_cls) -> None:
        """A None section should not produce a heading or a placeholder."""
        with_none = renderer_cls()
        with_none.add_heading("Request")
        with_none.add_key_value_section(None, as_sub_heading=True)
        untouched = renderer_cls()
        untouched.add_heading("Request")
        assert with_none.finalize("T") == untouched.finalize("T")

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_empty_section(self, renderer_cls) -> None:
        renderer = renderer_cls()
        export.add_section(renderer, _section())
        assert "Empty" in renderer.finalize("T")

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_missing_value_placeholder(self, renderer_cls) -> None:
        renderer = renderer_cls()
        export.add_section(renderer, _section(("Host", None)))
        output = renderer.finalize("T")
        assert "Host" in output
        assert "–" in output

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_item_order_is_preserved(self, renderer_cls) -> None:
        renderer = renderer_cls()
        export.add_section(renderer, _section(("b-header", "2"), ("a-header", "1")))
        output = renderer.finalize("T")
        assert output.index("b-header") < output.index("a-header")

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_non_text_data_uses_byte_count(self, renderer_cls) -> None:
        renderer = renderer_cls()
        renderer.add_data(b"\xff\xfe")
        output = renderer.finalize("T")
        assert "Data: 2 bytes" in output
        assert "�" not in output

    @_pytest.mark.parametrize("renderer_cls", ALL_RENDERERS)
    def test_json_data_is_pretty_printed(self, renderer_cls) -> None:
        renderer = renderer_cls()
        renderer.add_data(b'{"a":1}')
        output = renderer.finalize("T")
        assert '"a"' in output or "&quot;a&quot;" in output
        assert '{"a":1}' not in output


class TestPlainTextRenderer:
    """Tests for PlainTextRenderer."""

    def test_headings(self) -> None:
        renderer = export.PlainTextRenderer()
        renderer.add_heading("Request")
        renderer.add_sub_heading("Request Body")
        assert renderer.finalize("Request Log") == "## Request\n\n#### Request Body\n\n"

    def test_section_rows(self) -> None:
        renderer = export.PlainTextRenderer()
        export.add_section(renderer, _section(("Accept", "*/*"), ("Host", None)))
        assert renderer.finalize("T") == "#### Headers\n\n- Accept: */*\n- Host: –\n\n"

    def test_section_as_primary_heading(self) -> None:
        renderer = export.PlainTextRenderer()
        renderer.add_key_value_section(_section(title="Summary"), as_sub_heading=False)
        assert renderer.finalize("T") == "## Summary\n\nEmpty\n\n"

    def test_json_data(self) -> None:
        renderer = export.PlainTextRenderer()
        renderer.add_data(b'{"a":1}')
        assert renderer.finalize("T") == '{\n  "a": 1\n}\n\n'

    def test_text_data(self) -> None:
        renderer = export.PlainTextRenderer()
        renderer.add_data(b"hello=world")
        assert renderer.finalize("T") == "hello=world\n\n"

    def test_no_table_of_contents(self) -> None:
        renderer = export.PlainTextRenderer()
        renderer.add_heading("Request")
        output = renderer.finalize("Request Log")
        assert "Request Log" not in output
        assert "[" not in output


class TestMarkdownRenderer:
    """Tests for MarkdownRenderer."""

    def test_document_layout(self) -> None:
        renderer = export.MarkdownRenderer()
        renderer.add_heading("Request")
        renderer.add_sub_heading("Request Body")
        assert renderer.finalize("Request Log") == (
            "# Request Log\n\n"
            "- [**Request**](request)\n"
            "  - [Request Body](request_body)\n\n"
            '<a id="request"></a>\n## Request\n\n'
            '<a id="request_body"></a>\n#### Request Body\n\n'
        )

    def test_section_rows(self) -> None:
        renderer = export.MarkdownRenderer()
        export.add_section(renderer, _section(("Accept", "*/*"), ("Host", None)))
        output = renderer.finalize("T")
        assert "- **Accept**: */*\n- **Host**: –\n" in output

    def test_json_fence_is_tagged(self) -> None:
        renderer = export.MarkdownRenderer()
        renderer.add_data(b'{"a":1}')
        assert '```json\n{\n  "a": 1\n}\n```\n\n' in renderer.finalize("T")

    def test_text_fence_is_untagged(self) -> None:
        renderer = export.MarkdownRenderer()
        renderer.add_data(b"plain body")
        assert "```\nplain body\n```\n\n" in renderer.finalize("T")

    def test_binary_fence_is_untagged(self) -> None:
        renderer = export.MarkdownRenderer()
        renderer.add_data(b"\xff\xfe")
        assert "```\nData: 2 bytes\n```" in renderer.finalize("T")


class TestHTMLRenderer:
    """Tests for HTMLRenderer."""

    def test_headings_are_recorded(self) -> None:
        renderer = export.HTMLRenderer()
        renderer.add_heading("Request")
        renderer.add_sub_heading("Request Body")
        assert renderer.headings == (
            html_renderer.HeadingRecord(level=2, title="Request"),
            html_renderer.HeadingRecord(level=3, title="Request Body"),
        )

    def test_heading_ids(self) -> None:
        renderer = export.HTMLRenderer()
        renderer.add_sub_heading("Request Body")
        assert "<h3 id='request_body'>Request Body</h3>" in renderer.finalize("T")

    def test_section_list(self) -> None:
        renderer = export.HTMLRenderer()
        export.add_section(renderer, _section(("Accept", "*/*"), ("Host", None)))
        output = renderer.finalize("T")
        assert "<li><strong>Accept</strong>: */*</li>" in output
        assert "<li><strong>Host</strong>: –</li>" in output

    def test_empty_section_paragraph(self) -> None:
        renderer = export.HTMLRenderer()
        export.add_section(renderer, _section())
        assert "<p>Empty</p>" in renderer.finalize("T")

    def test_escapes_text(self) -> None:
        """Keys, values and text bodies must be escaped."""
        renderer = export.HTMLRenderer()
        export.add_section(renderer, _section(("X-Tag", "<b>bold</b>")))
        renderer.add_data(b"<script>alert(1)</script>")
        output = renderer.finalize("T")
        assert "<b>bold</b>" not in output
        assert "&lt;b&gt;bold&lt;/b&gt;" in output
        assert "<script>" not in output

    def test_json_is_colorized(self) -> None:
        renderer = export.HTMLRenderer()
        renderer.add_data(b'{"a":1}')
        output = renderer.finalize("T")
        assert '<pre><code><span class="o">{</span>' in output
        assert '<span class="n">1</span>' in output

    def test_text_is_not_colorized(self) -> None:
        renderer = export.HTMLRenderer()
        renderer.add_data(b"plain body")
        output = renderer.finalize("T")
        assert "<pre><code>plain body</code></pre>" in output

    def test_self_contained_document(self) -> None:
        renderer = export.HTMLRenderer()
        renderer.add_heading("Request")
        output = renderer.finalize("Request Log")
        assert output.startswith("<!DOCTYPE html>\n")
        assert "<title>Request Log</title>" in output
        assert "<style>" in output
        assert "prefers-color-scheme: dark" in output
        assert "src=" not in output
        assert "<link" not in output
        assert output.rstrip().endswith("</html>")

    def test_toc_rows(self) -> None:
        renderer = export.HTMLRenderer()
        renderer.add_heading("Request")
        renderer.add_sub_heading("Request Headers")
        renderer.add_sub_heading("Request Body")
        renderer.add_heading("Response")
        assert renderer.make_toc() == (
            "<ul>\n"
            "<li><strong><a href='#request'>Request</a></strong>: "
            "<a href='#request_headers'>Request Headers</a> · "
            "<a href='#request_body'>Request Body</a></li>\n"
            "<li><strong><a href='#response'>Response</a></strong></li>\n"
            "</ul>"
        )

    def test_empty_toc(self) -> None:
        assert export.HTMLRenderer().make_toc() == ""


class TestGroupTocRows:
    """Tests for group_toc_rows()."""

    def test_groups_sub_headings_under_previous_heading(self) -> None:
        h2 = lambda title: html_renderer.HeadingRecord(level=2, title=title)  # noqa: E731
        h3 = lambda title: html_renderer.HeadingRecord(level=3, title=title)  # noqa: E731
        rows = html_renderer.group_toc_rows(
            [h2("Summary"), h2("Request"), h3("A"), h3("B"), h2("Details"), h3("C")]
        )
        assert [[h.title for h in row] for row in rows] == [
            ["Summary"],
            ["Request", "A", "B"],
            ["Details", "C"],
        ]

    def test_leading_sub_heading_starts_its_own_row(self) -> None:
        h3 = html_renderer.HeadingRecord(level=3, title="Orphan")
        assert html_renderer.group_toc_rows([h3]) == [[h3]]

    def test_empty(self) -> None:
        assert html_renderer.group_toc_rows([]) == []
