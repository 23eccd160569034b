"""Custom pydantic-settings sources for Heimdall configuration.

This module provides:

- YamlSettingsSource: A pydantic-settings source that loads configuration
  from layered YAML files.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: .heimdall/config.yaml in the project root
3. User config: ~/.config/heimdall/config.yaml (or HEIMDALL_CONFIG_DIR)

Nested mappings merge key by key; any other value in a higher layer
replaces the lower one.

Environment variables:
- HEIMDALL_CONFIG_DIR: Override user config directory (default: ~/.config/heimdall)
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "HEIMDALL_CONFIG_DIR"

PROJECT_CONFIG_DIR = ".heimdall"
CONFIG_FILE_NAME = "config.yaml"


class ConfigFileError(Exception):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def get_user_config_dir() -> _pathlib.Path:
    """
    Get the user config directory.

    Respects HEIMDALL_CONFIG_DIR environment variable if set,
    otherwise uses XDG standard path.
    """
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "heimdall"


def get_user_config_path() -> _pathlib.Path:
    """Get the path to the user config file."""
    return get_user_config_dir() / CONFIG_FILE_NAME


def get_project_config_path(project_root: _pathlib.Path) -> _pathlib.Path:
    """Get the path to the project config file (.heimdall/config.yaml)."""
    return project_root / PROJECT_CONFIG_DIR / CONFIG_FILE_NAME


def deep_merge(
    base: dict[str, _typing.Any],
    override: _typing.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Merge two config dicts, returning a new dict.

    Nested dicts merge recursively; every other value in ``override`` wins.
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, _typing.Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """
    Load a YAML config file.

    Returns:
        Parsed contents, or None if the file is empty.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed YAML,
            or contains non-dict content at the top level.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        return None

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise ConfigFileError(
            path,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


class YamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that merges the user and project YAML config files.

    Layers (lowest to highest precedence):
    1. User config (~/.config/heimdall/config.yaml)
    2. Project config (.heimdall/config.yaml)
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_root: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            project_root: Optional project root path for project-level config.
            user_config_path: Override path for user config file (for testing).
                If not provided, uses HEIMDALL_CONFIG_DIR or the XDG path.
        """
        super().__init__(settings_cls)
        self._project_root = project_root
        self._user_config_path = user_config_path
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._merged = self._load_config_layers()

    def _load_config_layers(self) -> dict[str, _typing.Any]:
        merged: dict[str, _typing.Any] = {}
        candidates: list[tuple[str, _pathlib.Path]] = [
            ("user", self._user_config_path or get_user_config_path()),
        ]
        if self._project_root:
            candidates.append(("project", get_project_config_path(self._project_root)))

        for name, path in candidates:
            # Missing files are normal (nothing configured at that layer)
            if not path.exists():
                continue
            content = load_yaml_file(path)
            if content:
                merged = deep_merge(merged, content)
                self._loaded_layers.append((name, path))
        return merged

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """Layers that were actually loaded, lowest precedence first."""
        return list(self._loaded_layers)

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        value = self._merged.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return the merged config as a plain dict for Pydantic validation."""
        return dict(self._merged)
