"""Configuration for the docbox client.

Settings are read from YAML files and ``DOCBOX_*`` environment variables.
YAML values support ${VAR} and ${VAR:-default} interpolation.

Example:
    >>> from docbox_client.config import get_settings
    >>> settings = get_settings()
    >>> settings.polling.interval_seconds
    1.0
"""

from __future__ import annotations

from docbox_client.config.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
)
from docbox_client.config.schema import (
    ConfigBaseModel,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ObservabilityConfig,
    PollingConfig,
    ServerConfig,
    UploadConfig,
    UploadStrategy,
)
from docbox_client.config.settings import (
    Settings,
    clear_settings_cache,
    find_config_file,
    get_settings,
    load_settings,
)


__all__ = [
    "ConfigBaseModel",
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ObservabilityConfig",
    "PollingConfig",
    "ServerConfig",
    "Settings",
    "UploadConfig",
    "UploadStrategy",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]
