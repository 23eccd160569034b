"""
Heimdall - Request Log Export

Turns a captured network exchange into a shareable document
(plain text, Markdown or self-contained HTML).
Named after the Norse watchman who sees and hears everything.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("heimdall-export")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Heimdall Contributors"

from heimdall.export import ExportFormat, export_summary  # noqa: E402
from heimdall.summary import KeyValueSection, Summary  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ExportFormat",
    "KeyValueSection",
    "Summary",
    "export_summary",
]
