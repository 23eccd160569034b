"""
JSON pretty-printer and colorizer.

Renders an already-parsed JSON value as indented text. The printer emits a
stream of tokens into a token writer; the text writer passes them through
unchanged, the HTML writer escapes them and wraps each one in a span whose
class selects its color in the exported stylesheet:

- ``s``: strings and object keys
- ``o``: punctuation ({ } [ ] , :)
- ``n``: numbers, booleans and null

Nesting is walked with an explicit stack, so arbitrarily deep documents
print without hitting the interpreter recursion limit.
"""

import dataclasses as _dataclasses
import enum as _enum
import html as _html
import io as _io
import json as _json
import typing as _typing

import heimdall.constants as _constants

Write = _typing.Callable[[str], _typing.Any]


class TokenKind(_enum.Enum):
    """Token class; the value is the CSS class used in HTML output."""

    STRING = "s"
    PUNCTUATION = "o"
    LITERAL = "n"


class TextTokenWriter:
    """Writes tokens verbatim."""

    def __init__(self, write: Write) -> None:
        self._write = write

    def token(self, text: str, kind: TokenKind) -> None:  # noqa: ARG002
        self._write(text)

    def whitespace(self, text: str) -> None:
        self._write(text)


class HTMLTokenWriter:
    """Writes tokens as escaped, class-tagged spans."""

    def __init__(self, write: Write) -> None:
        self._write = write

    def token(self, text: str, kind: TokenKind) -> None:
        self._write(f'<span class="{kind.value}">{_html.escape(text)}</span>')

    def whitespace(self, text: str) -> None:
        self._write(text)


TokenWriter = TextTokenWriter | HTMLTokenWriter


@_dataclasses.dataclass
class _Frame:
    """An open container being printed."""

    items: _typing.Iterator[_typing.Any]
    is_object: bool
    depth: int
    first: bool = True


class JSONPrinter:
    """
    Pretty-prints parsed JSON values into a token writer.

    Output matches ``json.dumps(value, indent=2, ensure_ascii=False)``:
    two spaces per level, ``"key": value`` pairs, empty containers as
    ``{}``/``[]``, keys in parsed order.
    """

    def __init__(self, writer: TokenWriter, *, indent: str = _constants.JSON_INDENT) -> None:
        self._writer = writer
        self._indent = indent

    def print(self, value: _typing.Any) -> None:
        """Print one JSON value."""
        stack: list[_Frame] = []
        self._open(value, 0, stack)
        while stack:
            frame = stack[-1]
            item = next(frame.items, _END)
            if item is _END:
                stack.pop()
                self._newline(frame.depth)
                self._punctuation("}" if frame.is_object else "]")
                continue

            if not frame.first:
                self._punctuation(",")
            frame.first = False
            self._newline(frame.depth + 1)

            if frame.is_object:
                key, child = item
                self._writer.token(_json.dumps(str(key), ensure_ascii=False), TokenKind.STRING)
                self._punctuation(":")
                self._writer.whitespace(" ")
            else:
                child = item
            self._open(child, frame.depth + 1, stack)

    def _open(self, value: _typing.Any, depth: int, stack: list[_Frame]) -> None:
        """Print a scalar, or the opening of a container (pushing a frame)."""
        if isinstance(value, dict):
            if not value:
                self._punctuation("{}")
                return
            self._punctuation("{")
            stack.append(_Frame(iter(value.items()), True, depth))
        elif isinstance(value, (list, tuple)):
            if not value:
                self._punctuation("[]")
                return
            self._punctuation("[")
            stack.append(_Frame(iter(value), False, depth))
        elif isinstance(value, str):
            self._writer.token(_json.dumps(value, ensure_ascii=False), TokenKind.STRING)
        elif value is None:
            self._writer.token("null", TokenKind.LITERAL)
        elif isinstance(value, bool):
            self._writer.token("true" if value else "false", TokenKind.LITERAL)
        else:
            self._writer.token(_json.dumps(value), TokenKind.LITERAL)

    def _punctuation(self, text: str) -> None:
        self._writer.token(text, TokenKind.PUNCTUATION)

    def _newline(self, depth: int) -> None:
        self._writer.whitespace("\n" + self._indent * depth)


_END = object()


def format_json(value: _typing.Any, *, html: bool = False) -> str:
    """Pretty-print a parsed JSON value to a string (colorized spans if html)."""
    buffer = _io.StringIO()
    writer: TokenWriter = HTMLTokenWriter(buffer.write) if html else TextTokenWriter(buffer.write)
    JSONPrinter(writer).print(value)
    return buffer.getvalue()
