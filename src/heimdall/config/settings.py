"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with HEIMDALL_ prefix
3. .env file (if HEIMDALL_ENV_FILE points at one)
4. Layered YAML config files:
   - Project config: .heimdall/config.yaml (highest)
   - User config: ~/.config/heimdall/config.yaml

Nested config uses double underscore delimiter:
  HEIMDALL_EXPORT__DEFAULT_FORMAT=html
  HEIMDALL_LOGGING__LEVEL=debug
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import heimdall.config.sources as sources
import heimdall.config.types as types


def _get_env_file() -> str | None:
    """Return HEIMDALL_ENV_FILE if it names an existing file, else None."""
    if env_file := _os.environ.get("HEIMDALL_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Heimdall configuration settings.

    All settings can be overridden via environment variables with HEIMDALL_ prefix.
    For nested config, use double underscore: HEIMDALL_EXPORT__DEFAULT_FORMAT=html

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (HEIMDALL_*)
    3. .env file
    4. Project config (.heimdall/config.yaml)
    5. User config (~/.config/heimdall/config.yaml)
    6. Field defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="HEIMDALL_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # HEIMDALL_EXPORT__DEFAULT_FORMAT
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (HEIMDALL_* env vars)
        3. dotenv_settings (.env file)
        4. YAML config files (project over user)
        5. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.YamlSettingsSource(settings_cls, _pathlib.Path.cwd()),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without .env
        interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    export: types.ExportConfig = _pydantic.Field(default_factory=types.ExportConfig)
    """Export settings (default format, document title)."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    @property
    def default_format(self) -> types.ExportFormatName:
        """Default export format (alias to export.default_format)."""
        return self.export.default_format
