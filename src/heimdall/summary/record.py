"""Captured exchange records for Heimdall.

An exchange record is the on-disk description of one request/response pair
as written by a capture tool: URL, headers, bodies, options, error and
metrics. Records are plain JSON or YAML documents validated with Pydantic;
heimdall.summary.builder turns them into the Summary the exporters consume.

Bodies are stored as strings. ``body_encoding`` says how to turn them back
into bytes: ``utf-8`` (the default) for text payloads and ``base64`` for
anything else.
"""

import base64 as _base64
import binascii as _binascii
import datetime as _datetime
import json as _json
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

BodyEncoding = _typing.Literal["utf-8", "base64"]
TaskState = _typing.Literal["pending", "success", "failure"]


class RecordError(Exception):
    """Error loading or validating an exchange record file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in record file {path}: {message}")


def _strip_whitespace(text: str) -> str:
    # Encoders and YAML block scalars wrap base64 across lines
    return "".join(text.split())


class RecordBase(_pydantic.BaseModel):
    """Base class for record types (immutable, unknown keys ignored)."""

    model_config = _pydantic.ConfigDict(frozen=True, extra="ignore")


class _BodyMixin(RecordBase):
    body: str | None = None
    """Payload text (see body_encoding)."""

    body_encoding: BodyEncoding = "utf-8"
    """How ``body`` maps back to bytes."""

    @_pydantic.model_validator(mode="after")
    def _check_body_encoding(self) -> "_BodyMixin":
        if self.body is not None and self.body_encoding == "base64":
            try:
                _base64.b64decode(_strip_whitespace(self.body), validate=True)
            except _binascii.Error as e:
                raise ValueError(f"body is not valid base64: {e}") from e
        return self

    def body_bytes(self) -> bytes | None:
        """Return the payload as bytes, or None when there is no body."""
        if self.body is None:
            return None
        if self.body_encoding == "base64":
            return _base64.b64decode(_strip_whitespace(self.body), validate=True)
        return self.body.encode("utf-8")


class RequestRecord(_BodyMixin):
    """The outgoing request."""

    url: str
    method: str = "GET"
    headers: dict[str, str] = _pydantic.Field(default_factory=dict)
    cache_policy: str = "useProtocolCachePolicy"
    timeout_interval: float = _pydantic.Field(default=60.0, ge=0)
    allows_cellular_access: bool = True
    allows_expensive_network_access: bool = True
    allows_constrained_network_access: bool = True
    http_should_handle_cookies: bool = True
    http_should_use_pipelining: bool = False


class ResponseRecord(_BodyMixin):
    """The response, if one was received."""

    status_code: int = 200
    headers: dict[str, str] = _pydantic.Field(default_factory=dict)
    content_type: str | None = None


class ErrorRecord(RecordBase):
    """Failure reported by the networking layer."""

    domain: str | None = None
    code: int = 0
    description: str | None = None


class TimingRecord(RecordBase):
    """Milestones of a single transaction, in chronological order."""

    fetch_start: _datetime.datetime | None = None
    domain_lookup_start: _datetime.datetime | None = None
    domain_lookup_end: _datetime.datetime | None = None
    connect_start: _datetime.datetime | None = None
    secure_connection_start: _datetime.datetime | None = None
    secure_connection_end: _datetime.datetime | None = None
    connect_end: _datetime.datetime | None = None
    request_start: _datetime.datetime | None = None
    request_end: _datetime.datetime | None = None
    response_start: _datetime.datetime | None = None
    response_end: _datetime.datetime | None = None

    @_pydantic.field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value: _datetime.datetime | None) -> _datetime.datetime | None:
        # Milestones are subtracted from each other; naive values are read as UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=_datetime.timezone.utc)
        return value


class TransferRecord(RecordBase):
    """Byte counts sent and received."""

    total_bytes_sent: int = _pydantic.Field(default=0, ge=0)
    headers_bytes_sent: int = _pydantic.Field(default=0, ge=0)
    body_bytes_sent: int = _pydantic.Field(default=0, ge=0)
    total_bytes_received: int = _pydantic.Field(default=0, ge=0)
    headers_bytes_received: int = _pydantic.Field(default=0, ge=0)
    body_bytes_received: int = _pydantic.Field(default=0, ge=0)


class MetricsRecord(RecordBase):
    timing: TimingRecord = _pydantic.Field(default_factory=TimingRecord)
    transfer: TransferRecord | None = None


class ExchangeRecord(RecordBase):
    """One captured network exchange."""

    request: RequestRecord
    response: ResponseRecord | None = None
    error: ErrorRecord | None = None
    metrics: MetricsRecord | None = None
    task_type: str | None = None
    """Session task class name (e.g. URLSessionUploadTask)."""

    state: TaskState = "success"
    start_date: _datetime.datetime | None = None
    duration: float | None = _pydantic.Field(default=None, ge=0)
    """Total duration in seconds."""


def _parse_document(path: _pathlib.Path, text: str) -> _typing.Any:
    """Parse YAML for .yaml/.yml files, JSON otherwise."""
    if path.suffix.lower() in (".yaml", ".yml"):
        return _yaml.safe_load(text)
    return _json.loads(text)


def load_record(path: _pathlib.Path | str) -> ExchangeRecord:
    """
    Load and validate an exchange record file.

    Args:
        path: Path to a JSON or YAML record.

    Returns:
        The validated record.

    Raises:
        RecordError: If the file cannot be read, parsed or validated.
    """
    path = _pathlib.Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RecordError(path, f"cannot read file: {e}") from e

    try:
        data = _parse_document(path, text)
    except (_json.JSONDecodeError, _yaml.YAMLError) as e:
        raise RecordError(path, f"malformed document: {e}") from e

    if not isinstance(data, dict):
        raise RecordError(path, "top level must be a mapping")

    try:
        return ExchangeRecord.model_validate(data)
    except _pydantic.ValidationError as e:
        raise RecordError(path, str(e)) from e
