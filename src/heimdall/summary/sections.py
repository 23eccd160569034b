"""
Section factories for Heimdall.

Build the KeyValueSections shown for an exchange record. Every factory
returns sections whose item order is final: sorting (headers) happens here,
never in the renderers.
"""

import datetime as _datetime
import http as _http
import typing as _typing
import urllib.parse as _urlparse

import heimdall.summary.record as record
import heimdall.summary.types as types

NSURL_ERROR_DOMAIN = "NSURLErrorDomain"

DEFAULT_TASK_TYPE = "URLSessionDataTask"

# NSURLErrorDomain codes -> short description
_URL_ERROR_DESCRIPTIONS: dict[int, str] = {
    -1: "Unknown",
    -999: "Cancelled",
    -1000: "Bad URL",
    -1001: "Timed Out",
    -1002: "Unsupported URL",
    -1003: "Cannot Find Host",
    -1004: "Cannot Connect to Host",
    -1005: "Network Connection Lost",
    -1006: "DNS Lookup Failed",
    -1007: "Too Many Redirects",
    -1008: "Resource Unavailable",
    -1009: "Not Connected to Internet",
    -1010: "Redirect to Non-Existent Location",
    -1011: "Bad Server Response",
    -1012: "User Cancelled Authentication",
    -1013: "User Authentication Required",
    -1014: "Zero Byte Resource",
    -1015: "Cannot Decode Raw Data",
    -1016: "Cannot Decode Content Data",
    -1017: "Cannot Parse Response",
    -1018: "International Roaming Off",
    -1019: "Call Is Active",
    -1020: "Data Not Allowed",
    -1021: "Request Body Stream Exhausted",
    -1022: "App Transport Security Requires Secure Connection",
    -1100: "File Does Not Exist",
    -1101: "File Is Directory",
    -1102: "No Permissions to Read File",
    -1103: "Data Length Exceeds Maximum",
    -1200: "Secure Connection Failed",
    -1201: "Server Certificate Has Bad Date",
    -1202: "Server Certificate Untrusted",
    -1203: "Server Certificate Has Unknown Root",
    -1204: "Server Certificate Not Yet Valid",
    -1205: "Client Certificate Rejected",
    -1206: "Client Certificate Required",
    -2000: "Cannot Load From Network",
}

# Timing milestones in chronological order
_TIMING_MILESTONES: tuple[tuple[str, str], ...] = (
    ("fetch_start", "Fetch Start"),
    ("domain_lookup_start", "Domain Lookup Start"),
    ("domain_lookup_end", "Domain Lookup End"),
    ("connect_start", "Connect Start"),
    ("secure_connection_start", "Secure Connect Start"),
    ("secure_connection_end", "Secure Connect End"),
    ("connect_end", "Connect End"),
    ("request_start", "Request Start"),
    ("request_end", "Request End"),
    ("response_start", "Response Start"),
    ("response_end", "Response End"),
)

_STATE_COLORS: dict[str, types.SectionColor] = {
    "pending": types.SectionColor.ORANGE,
    "success": types.SectionColor.GREEN,
    "failure": types.SectionColor.RED,
}


def format_duration(seconds: float) -> str:
    """
    Format a duration for display.

    Examples:
        >>> format_duration(0.0042)
        '4.2ms'
        >>> format_duration(0.25)
        '250ms'
        >>> format_duration(2.5)
        '2.5s'
        >>> format_duration(90)
        '1min 30s'
    """
    if seconds < 1:
        milliseconds = seconds * 1000
        if milliseconds < 10:
            return f"{milliseconds:.1f}ms"
        return f"{milliseconds:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(round(seconds), 60)
    if rest == 0:
        return f"{minutes}min"
    return f"{minutes}min {rest}s"


def format_date(date: _datetime.datetime) -> str:
    """Format a date as e.g. 'Dec 5, 2025 at 2:30:22 PM (UTC)'."""
    hour = date.hour % 12 or 12
    meridiem = "AM" if date.hour < 12 else "PM"
    text = (
        f"{date:%b} {date.day}, {date.year} at "
        f"{hour}:{date:%M:%S} {meridiem}"
    )
    zone = date.tzname()
    if zone:
        text += f" ({zone})"
    return text


def _format_flag(value: bool) -> str:
    return "true" if value else "false"


def _status_description(status_code: int) -> str:
    try:
        return f"{status_code} {_http.HTTPStatus(status_code).phrase}"
    except ValueError:
        return str(status_code)


def make_headers(
    title: str,
    headers: _typing.Mapping[str, str] | None,
) -> types.KeyValueSection:
    """Headers sorted by name."""
    items = sorted((headers or {}).items(), key=lambda item: item[0])
    return types.KeyValueSection(title=title, color=types.SectionColor.RED, items=tuple(items))


def describe_error_code(domain: str | None, code: int) -> str:
    """Return the error code, with a description for URL loading errors."""
    if domain != NSURL_ERROR_DOMAIN:
        return str(code)
    return f"{code} ({_URL_ERROR_DESCRIPTIONS.get(code, 'Unknown')})"


def make_error_details(exchange: record.ExchangeRecord) -> types.KeyValueSection | None:
    """Error section, or None unless the exchange failed with a non-zero code."""
    error = exchange.error
    if error is None or error.code == 0 or exchange.state != "failure":
        return None
    return types.KeyValueSection(
        title="Error",
        color=types.SectionColor.RED,
        items=(
            ("Domain", error.domain),
            ("Code", describe_error_code(error.domain, error.code)),
            ("Description", error.description),
        ),
    )


def parse_query_items(query: str) -> list[tuple[str, str | None]]:
    """
    Split a query string into (name, value) pairs.

    A name without '=' has no value (None); 'name=' has an empty value.
    """
    items: list[tuple[str, str | None]] = []
    for part in query.split("&"):
        if not part:
            continue
        name, sep, value = part.partition("=")
        items.append(
            (_urlparse.unquote_plus(name), _urlparse.unquote_plus(value) if sep else None)
        )
    return items


def make_query_items(url: str) -> types.KeyValueSection | None:
    """Query items of a URL, or None when it has none."""
    items = parse_query_items(_urlparse.urlsplit(url).query)
    if not items:
        return None
    return types.KeyValueSection(
        title="Query Items",
        color=types.SectionColor.PURPLE,
        items=tuple(items),
    )


def make_parameters(request: record.RequestRecord) -> types.KeyValueSection:
    """Request options; boolean options are listed only when not at their default."""
    items: list[tuple[str, str | None]] = [
        ("Cache Policy", request.cache_policy),
        ("Timeout Interval", format_duration(request.timeout_interval)),
    ]
    if not request.allows_cellular_access:
        items.append(("Allows Cellular Access", _format_flag(request.allows_cellular_access)))
    if not request.allows_expensive_network_access:
        items.append(
            (
                "Allows Expensive Network Access",
                _format_flag(request.allows_expensive_network_access),
            )
        )
    if not request.allows_constrained_network_access:
        items.append(
            (
                "Allows Constrained Network Access",
                _format_flag(request.allows_constrained_network_access),
            )
        )
    if not request.http_should_handle_cookies:
        items.append(("Should Handle Cookies", _format_flag(request.http_should_handle_cookies)))
    if request.http_should_use_pipelining:
        items.append(
            ("HTTP Should Use Pipelining", _format_flag(request.http_should_use_pipelining))
        )
    return types.KeyValueSection(
        title="Options", color=types.SectionColor.INDIGO, items=tuple(items)
    )


def _task_detail_items(exchange: record.ExchangeRecord) -> list[tuple[str, str | None]]:
    duration = exchange.duration
    return [
        ("Host", _urlparse.urlsplit(exchange.request.url).hostname),
        ("Date", format_date(exchange.start_date) if exchange.start_date else None),
        ("Duration", format_duration(duration) if duration else None),
    ]


def make_task_details(exchange: record.ExchangeRecord) -> types.KeyValueSection:
    """Task section titled with the task type."""
    return types.KeyValueSection(
        title=exchange.task_type or DEFAULT_TASK_TYPE,
        color=types.SectionColor.PRIMARY,
        items=tuple(_task_detail_items(exchange)),
    )


def make_overview(exchange: record.ExchangeRecord) -> types.KeyValueSection:
    """Overview section: what was requested, how it ended, and the task details."""
    response = exchange.response
    items: list[tuple[str, str | None]] = [
        ("URL", exchange.request.url),
        ("Method", exchange.request.method.upper()),
        ("Status Code", _status_description(response.status_code) if response else None),
        ("Content Type", response.content_type if response else None),
        ("Task", exchange.task_type or DEFAULT_TASK_TYPE),
    ]
    items.extend(_task_detail_items(exchange))
    return types.KeyValueSection(
        title="Summary",
        color=_STATE_COLORS[exchange.state],
        items=tuple(items),
    )


def make_timing(timing: record.TimingRecord) -> types.KeyValueSection:
    """
    Timing section.

    The first present milestone also provides the Date row; each later
    milestone shows its offset from it.
    """
    items: list[tuple[str, str | None]] = []
    start: _datetime.datetime | None = None
    for field, label in _TIMING_MILESTONES:
        date: _datetime.datetime | None = getattr(timing, field)
        if date is None:
            continue
        if start is None:
            start = date
            items.append(("Date", format_date(date)))
        value = f"{date:%H:%M:%S.%f}"
        if date != start:
            value += f" (+{format_duration((date - start).total_seconds())})"
        items.append((label, value))
    return types.KeyValueSection(
        title="Timing", color=types.SectionColor.ORANGE, items=tuple(items)
    )
