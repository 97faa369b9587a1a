"""Settings loading for the docbox client.

Settings come from constructor arguments, ``DOCBOX_*`` environment
variables and an optional YAML file, in that order of precedence.

Example:
    >>> from docbox_client.config import load_settings
    >>> settings = load_settings()
    >>> print(settings.server.url)
    http://localhost:8080
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)
from yaml import YAMLError

from docbox_client.config.exceptions import (
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
)
from docbox_client.config.schema import (
    ObservabilityConfig,
    PollingConfig,
    ServerConfig,
    UploadConfig,
)


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = [
    "Settings",
    "clear_settings_cache",
    "find_config_file",
    "get_settings",
    "load_settings",
]


# ---------------------------------------------------------------------------
# Environment Variable Interpolation
# ---------------------------------------------------------------------------

# ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _interpolate_env_vars(value: object) -> object:
    """Recursively substitute ${VAR} and ${VAR:-default} in strings.

    Unset variables without a default become empty strings. Dicts and lists
    are walked; other values are returned unchanged.

    Example:
        >>> os.environ["DOCBOX_API_KEY"] = "secret"
        >>> _interpolate_env_vars({"x-api-key": "${DOCBOX_API_KEY}"})
        {'x-api-key': 'secret'}
    """
    if isinstance(value, str):

        def replace(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            return match.group(2) or ""

        return _ENV_VAR_PATTERN.sub(replace, value)

    if isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}

    if isinstance(value, list):
        return [_interpolate_env_vars(item) for item in value]

    return value


class _InterpolatingYamlConfigSettingsSource(YamlConfigSettingsSource):
    """YAML settings source that interpolates environment variables."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | str | None = None,
    ) -> None:
        if yaml_file is not None:
            super().__init__(settings_cls, yaml_file=yaml_file)
        else:
            super().__init__(settings_cls)

    def _read_files(
        self,
        files: Path | str | Sequence[Path | str] | None,
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> dict[str, Any]:
        # Newer pydantic-settings passes extra merge options through
        interpolated = _interpolate_env_vars(
            super()._read_files(files, *args, **kwargs),
        )
        if not isinstance(interpolated, dict):  # pragma: no cover
            return {}
        return interpolated


# ---------------------------------------------------------------------------
# Settings Class
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Client settings.

    Priority order (highest to lowest):
    1. Constructor arguments
    2. Environment variables (``DOCBOX_SERVER__URL``, ...)
    3. YAML configuration file
    4. Default values

    Attributes:
        server: Connection to the docbox API.
        polling: Task polling behaviour.
        upload: Upload behaviour.
        observability: Logging settings.

    Example:
        ```yaml
        server:
          url: https://docbox.internal
          headers:
            x-tenant-id: acme
            x-api-key: ${DOCBOX_API_KEY}
        polling:
          interval_seconds: 2
        ```
    """

    model_config = SettingsConfigDict(
        yaml_file=None,
        yaml_file_encoding="utf-8",
        env_prefix="DOCBOX_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    CONFIG_SEARCH_PATHS: ClassVar[list[Path]] = [
        Path("docbox.yaml"),
        Path("docbox.yml"),
        Path.home() / ".config" / "docbox" / "config.yaml",
        Path("/etc/docbox/config.yaml"),
    ]

    # Set by load_settings() for the duration of one instantiation
    _yaml_file_override: ClassVar[Path | str | None] = None

    server: ServerConfig = ServerConfig()
    polling: PollingConfig = PollingConfig()
    upload: UploadConfig = UploadConfig()
    observability: ObservabilityConfig = ObservabilityConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order settings sources; dotenv files are not read."""
        return (
            init_settings,
            env_settings,
            _InterpolatingYamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._yaml_file_override,
            ),
            file_secret_settings,
        )


# ---------------------------------------------------------------------------
# Settings Loading Functions
# ---------------------------------------------------------------------------

_cached_settings: Settings | None = None


def find_config_file(config_path: Path | str | None = None) -> Path | None:
    """Find the settings file.

    Args:
        config_path: Explicit path, or None to search the default locations.

    Returns:
        Path of an existing file, or None.
    """
    if config_path is not None:
        path = Path(config_path)
        return path if path.is_file() else None

    for search_path in Settings.CONFIG_SEARCH_PATHS:
        if search_path.is_file():
            return search_path
    return None


def load_settings(
    config_path: Path | str | None = None,
    *,
    require_config_file: bool = False,
) -> Settings:
    """Load, validate and cache settings.

    An explicit ``config_path`` that does not exist is always an error;
    when searching the default locations a missing file is only an error
    with ``require_config_file``.

    Args:
        config_path: Path to a YAML settings file.
        require_config_file: Fail when no file is found.

    Returns:
        Validated settings.

    Raises:
        ConfigurationFileNotFoundError: If a required file is missing.
        ConfigurationValidationError: If validation or YAML parsing fails.
    """
    global _cached_settings  # noqa: PLW0603

    config_file = find_config_file(config_path)

    if config_file is None and (config_path is not None or require_config_file):
        raise ConfigurationFileNotFoundError(
            path=str(config_path) if config_path else None,
            searched_paths=[str(p) for p in Settings.CONFIG_SEARCH_PATHS],
        )

    Settings._yaml_file_override = config_file  # noqa: SLF001
    try:
        settings = Settings()
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc.error_count()} error(s)"
        raise ConfigurationValidationError(
            msg,
            errors=[dict(error) for error in exc.errors()],
        ) from exc
    except YAMLError as exc:
        msg = f"Failed to parse configuration file {config_file}: {exc}"
        raise ConfigurationValidationError(msg) from exc
    finally:
        Settings._yaml_file_override = None  # noqa: SLF001

    _cached_settings = settings
    return settings


def get_settings() -> Settings:
    """Return the cached settings, loading them on first use."""
    global _cached_settings  # noqa: PLW0603

    if _cached_settings is None:
        _cached_settings = load_settings()
    return _cached_settings


def clear_settings_cache() -> None:
    """Forget cached settings so the next :func:`get_settings` reloads."""
    global _cached_settings  # noqa: PLW0603
    _cached_settings = None
