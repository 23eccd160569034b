"""
Shared pytest fixtures for Heimdall tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import heimdall.summary as summary

# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture
def clean_env(tmp_path: _pathlib.Path) -> dict[str, str]:
    """
    Return environment dict without HEIMDALL_* keys.

    The user config directory points at an empty temporary directory so a
    developer's own ~/.config/heimdall never leaks into tests.
    """
    env = {k: v for k, v in _os.environ.items() if not k.startswith("HEIMDALL_")}
    env["HEIMDALL_CONFIG_DIR"] = str(tmp_path / "user-config")
    return env


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


# =============================================================================
# Summaries
# =============================================================================


@_pytest.fixture
def make_summary() -> _typing.Callable[..., summary.Summary]:
    """
    Factory for Summary objects with small, predictable sections.

    Keyword arguments override individual Summary fields.
    """

    def _make(**overrides: _typing.Any) -> summary.Summary:
        fields: dict[str, _typing.Any] = {
            "overview": summary.KeyValueSection(
                title="Summary",
                color=summary.SectionColor.GREEN,
                items=(("URL", "https://example.com/api?q=1"), ("Method", "GET")),
            ),
            "request_headers": summary.KeyValueSection(
                title="Request Headers",
                color=summary.SectionColor.RED,
                items=(("Accept", "application/json"),),
            ),
            "response_headers": summary.KeyValueSection(
                title="Response Headers",
                color=summary.SectionColor.RED,
                items=(("Content-Type", "application/json"),),
            ),
            "timing": summary.KeyValueSection(
                title="Timing",
                color=summary.SectionColor.ORANGE,
                items=(("Request Start", "12:00:00.000000"),),
            ),
            "parameters": summary.KeyValueSection(
                title="Query Items",
                color=summary.SectionColor.PURPLE,
                items=(("q", "1"),),
            ),
        }
        fields.update(overrides)
        return summary.Summary(**fields)

    return _make


@_pytest.fixture
def full_summary(make_summary) -> summary.Summary:
    """A summary with every optional part present."""
    return make_summary(
        error=summary.KeyValueSection(
            title="Error",
            color=summary.SectionColor.RED,
            items=(("Domain", "NSURLErrorDomain"), ("Code", "-1001 (Timed Out)")),
        ),
        request_body=b'{"a":1}',
        response_body=b'{"items": [1, "two", null, true], "next": null}',
        transfer=summary.TransferSizes(
            total_bytes_sent=320,
            headers_bytes_sent=313,
            body_bytes_sent=7,
            total_bytes_received=4096,
            headers_bytes_received=210,
            body_bytes_received=3886,
        ),
    )


# =============================================================================
# Exchange records
# =============================================================================


@_pytest.fixture
def record_data() -> dict[str, _typing.Any]:
    """A complete exchange record as it would be stored on disk."""
    return {
        "request": {
            "url": "https://api.example.com/v1/users?page=2&verbose",
            "method": "post",
            "headers": {"User-Agent": "demo/1.0", "Accept": "application/json"},
            "body": '{"name": "Ada"}',
            "timeout_interval": 30,
        },
        "response": {
            "status_code": 201,
            "headers": {"Content-Type": "application/json", "Cache-Control": "no-store"},
            "body": '{"id": 7, "name": "Ada"}',
            "content_type": "application/json",
        },
        "metrics": {
            "timing": {
                "fetch_start": "2025-12-05T14:30:22.000000+00:00",
                "request_start": "2025-12-05T14:30:22.120000+00:00",
                "response_end": "2025-12-05T14:30:22.450000+00:00",
            },
            "transfer": {
                "total_bytes_sent": 180,
                "headers_bytes_sent": 165,
                "body_bytes_sent": 15,
                "total_bytes_received": 2048,
                "headers_bytes_received": 2024,
                "body_bytes_received": 24,
            },
        },
        "task_type": "URLSessionDataTask",
        "state": "success",
        "start_date": "2025-12-05T14:30:22+00:00",
        "duration": 0.45,
    }


@_pytest.fixture
def record_file(tmp_path: _pathlib.Path, record_data: dict[str, _typing.Any]) -> _pathlib.Path:
    """The complete exchange record written as JSON."""
    path = tmp_path / "exchange.json"
    path.write_text(_json.dumps(record_data), encoding="utf-8")
    return path
