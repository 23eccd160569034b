"""Configuration type definitions for Heimdall settings.

These are the "config section" models nested within the main Settings
class:

- ExportConfig: default_format, title
- LoggingConfig: level

All types use `extra="allow"` so unknown keys are preserved and can be
reported instead of silently dropped.
"""

import typing as _typing

import pydantic as _pydantic

import heimdall.constants as _constants

ExportFormatName = _typing.Literal["text", "markdown", "html"]
LogLevelName = _typing.Literal["debug", "info", "warning", "error"]


class ConfigBase(_pydantic.BaseModel):
    """Base class for all config types."""

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}


class ExportConfig(ConfigBase):
    """
    Export settings.

    YAML section: export.*
    """

    default_format: ExportFormatName = "text"
    """Format used when neither --format nor an output suffix selects one."""

    title: str = _pydantic.Field(default=_constants.DEFAULT_DOCUMENT_TITLE, min_length=1)
    """Document title passed to the renderer."""


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: LogLevelName = "warning"
    """Log level for the CLI (--verbose forces debug)."""
