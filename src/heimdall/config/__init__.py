"""
Configuration module for Heimdall.

Uses pydantic-settings for environment variable and YAML file loading.
"""

from heimdall.config.settings import Settings
from heimdall.config.sources import ConfigFileError

__all__ = ["ConfigFileError", "Settings"]
