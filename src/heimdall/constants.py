"""
Shared constants for Heimdall.

This module provides a single source of truth for literal values
that appear in every export format.
"""

DEFAULT_DOCUMENT_TITLE = "Request Log"
"""Title passed to Renderer.finalize() for every export."""

EMPTY_SECTION_TEXT = "Empty"
"""Rendered in place of the rows of a section that has no items."""

MISSING_VALUE_PLACEHOLDER = "–"
"""Rendered for an item whose value is missing (en dash)."""

JSON_INDENT = "  "
"""One level of indentation in pretty-printed JSON bodies."""

DATA_PLACEHOLDER_PREFIX = "Data: "
"""Prefix of the byte-count placeholder for bodies that are neither JSON nor text."""

# Headings issued by the export driver
REQUEST_HEADING = "Request"
REQUEST_BODY_HEADING = "Request Body"
RESPONSE_HEADING = "Response"
RESPONSE_BODY_HEADING = "Response Body"
DETAILS_HEADING = "Details"
TRANSFER_SECTION_TITLE = "Sent Data"
