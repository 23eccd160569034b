"""
Summary data types for Heimdall.

These are data transfer objects (DTOs) consumed by the exporters.
They contain no rendering logic - just structured, read-only data.
"""

import dataclasses as _dataclasses
import enum as _enum

KeyValueItem = tuple[str, str | None]
"""One row of a KeyValueSection: (name, optional value)."""


class SectionColor(_enum.Enum):
    """Semantic color tag attached to a section (a hint for rich formats)."""

    PRIMARY = "primary"
    GRAY = "gray"
    RED = "red"
    ORANGE = "orange"
    GREEN = "green"
    BLUE = "blue"
    INDIGO = "indigo"
    PURPLE = "purple"


@_dataclasses.dataclass(frozen=True)
class KeyValueSection:
    """
    A titled, ordered list of optionally-valued named fields.

    Items are rendered in the order given; renderers never re-sort them.
    """

    title: str
    color: SectionColor = SectionColor.PRIMARY
    items: tuple[KeyValueItem, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of pairs but store an immutable tuple
        object.__setattr__(self, "items", tuple((k, v) for k, v in self.items))


@_dataclasses.dataclass(frozen=True)
class TransferSizes:
    """Byte counts transferred for one exchange."""

    total_bytes_sent: int = 0
    headers_bytes_sent: int = 0
    body_bytes_sent: int = 0
    total_bytes_received: int = 0
    headers_bytes_received: int = 0
    body_bytes_received: int = 0

    def rows(self) -> tuple[tuple[str, int], ...]:
        """Labelled counts in display order: sent first, then received."""
        return (
            ("Total Bytes Sent", self.total_bytes_sent),
            ("Headers Sent", self.headers_bytes_sent),
            ("Body Sent", self.body_bytes_sent),
            ("Total Bytes Received", self.total_bytes_received),
            ("Headers Received", self.headers_bytes_received),
            ("Body Received", self.body_bytes_received),
        )


@_dataclasses.dataclass(frozen=True)
class Summary:
    """
    Immutable snapshot of one logged network exchange.

    Built once upstream (see heimdall.summary.builder) and only read by the
    exporters, so a single instance may be shared by concurrent exports.
    """

    overview: KeyValueSection
    request_headers: KeyValueSection
    response_headers: KeyValueSection
    timing: KeyValueSection
    error: KeyValueSection | None = None
    parameters: KeyValueSection | None = None
    request_body: bytes | None = None
    response_body: bytes | None = None
    transfer: TransferSizes | None = None
