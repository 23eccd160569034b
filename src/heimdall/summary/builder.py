"""
Summary builder for Heimdall.

Assembles the read-only Summary consumed by the exporters from a
validated exchange record.
"""

import logging as _logging

import heimdall.summary.record as record
import heimdall.summary.sections as sections
import heimdall.summary.types as types

_logger = _logging.getLogger(__name__)


def _transfer_sizes(metrics: record.MetricsRecord | None) -> types.TransferSizes | None:
    if metrics is None or metrics.transfer is None:
        return None
    transfer = metrics.transfer
    return types.TransferSizes(
        total_bytes_sent=transfer.total_bytes_sent,
        headers_bytes_sent=transfer.headers_bytes_sent,
        body_bytes_sent=transfer.body_bytes_sent,
        total_bytes_received=transfer.total_bytes_received,
        headers_bytes_received=transfer.headers_bytes_received,
        body_bytes_received=transfer.body_bytes_received,
    )


def build_summary(exchange: record.ExchangeRecord) -> types.Summary:
    """
    Build the Summary for one exchange.

    Parameters are the URL query items when the URL has any, otherwise the
    request options.
    """
    request = exchange.request
    response = exchange.response
    timing = exchange.metrics.timing if exchange.metrics else record.TimingRecord()

    summary = types.Summary(
        overview=sections.make_overview(exchange),
        error=sections.make_error_details(exchange),
        request_headers=sections.make_headers("Request Headers", request.headers),
        response_headers=sections.make_headers(
            "Response Headers", response.headers if response else None
        ),
        timing=sections.make_timing(timing),
        parameters=sections.make_query_items(request.url) or sections.make_parameters(request),
        request_body=request.body_bytes(),
        response_body=response.body_bytes() if response else None,
        transfer=_transfer_sizes(exchange.metrics),
    )
    _logger.debug(
        "Built summary for %s %s (error=%s, transfer=%s)",
        request.method,
        request.url,
        summary.error is not None,
        summary.transfer is not None,
    )
    return summary
