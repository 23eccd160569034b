"""
Summary module for Heimdall.

Provides the read-only Summary consumed by the exporters, plus the
exchange-record loader and section factories that produce it.
"""

from heimdall.summary.builder import build_summary
from heimdall.summary.record import ExchangeRecord, RecordError, load_record
from heimdall.summary.types import (
    KeyValueItem,
    KeyValueSection,
    SectionColor,
    Summary,
    TransferSizes,
)

__all__ = [
    "ExchangeRecord",
    "KeyValueItem",
    "KeyValueSection",
    "RecordError",
    "SectionColor",
    "Summary",
    "TransferSizes",
    "build_summary",
    "load_record",
]
