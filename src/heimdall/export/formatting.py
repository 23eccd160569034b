"""
Formatting helpers shared by every renderer.

Anchors, byte counts and the decoding rules for body payloads live here so
the three output formats cannot drift apart.
"""

import json as _json
import logging as _logging
import typing as _typing

import heimdall.constants as _constants

_logger = _logging.getLogger(__name__)

JSONContainer = dict[str, _typing.Any] | list[_typing.Any]

_BYTE_UNITS = ("KB", "MB", "GB", "TB", "PB")


def anchor_for(title: str) -> str:
    """
    Return the same-document anchor for a heading title.

    Lowercases and replaces spaces with underscores; nothing else is escaped.

    Example:
        >>> anchor_for("Request Body")
        'request_body'
    """
    return title.replace(" ", "_").lower()


def format_byte_count(count: int) -> str:
    """
    Format a byte count using binary (1024) units.

    Examples:
        >>> format_byte_count(1)
        '1 byte'
        >>> format_byte_count(512)
        '512 bytes'
        >>> format_byte_count(3276)
        '3.2 KB'
        >>> format_byte_count(2 * 1024 * 1024)
        '2 MB'
    """
    if count == 1:
        return "1 byte"
    if count < 1024:
        return f"{count} bytes"
    value = float(count)
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS:
        value /= 1024
        if round(value, 1) < 1024:
            break
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {unit}"


def describe_data(data: bytes) -> str:
    """Placeholder for a payload that is neither JSON nor text."""
    return f"{_constants.DATA_PLACEHOLDER_PREFIX}{format_byte_count(len(data))}"


def _reject_constant(name: str) -> _typing.NoReturn:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_json(data: bytes) -> JSONContainer | None:
    """
    Parse a body as a JSON document.

    Only objects and arrays count as JSON documents; scalar documents, NaN and
    Infinity literals, undecodable bytes and nesting too deep for the parser
    all return None.
    """
    try:
        value = _json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        _logger.debug("Body is not JSON (%d bytes): %s", len(data), type(e).__name__)
        return None
    if not isinstance(value, (dict, list)):
        _logger.debug("Body is a JSON scalar (%d bytes), treating as text", len(data))
        return None
    return value


def decode_text(data: bytes) -> str | None:
    """Decode a body as strict UTF-8, or return None."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        _logger.debug("Body is not UTF-8 (%d bytes), using byte count", len(data))
        return None
