"""Configuration schema models for the docbox client.

These models validate the sections of the settings file. They are stricter
than the API models: unknown keys are rejected so typos surface early.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


__all__ = [
    "ConfigBaseModel",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ObservabilityConfig",
    "PollingConfig",
    "ServerConfig",
    "UploadConfig",
    "UploadStrategy",
]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class LogFormat(StrEnum):
    """Log output format.

    Attributes:
        AUTO: Console output on a TTY, logfmt otherwise.
        CONSOLE: Human-readable console output with colors.
        LOGFMT: Machine-parseable key=value lines.
    """

    AUTO = "auto"
    CONSOLE = "console"
    LOGFMT = "logfmt"


class LogLevel(StrEnum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class UploadStrategy(StrEnum):
    """How the command line uploads files.

    Attributes:
        PRESIGNED: Send bytes straight to storage through a presigned target.
        TRACKED: Send bytes through the API and poll the processing task.
    """

    PRESIGNED = "presigned"
    TRACKED = "tracked"


# ---------------------------------------------------------------------------
# Base Configuration Model
# ---------------------------------------------------------------------------


class ConfigBaseModel(BaseModel):
    """Base model for all configuration sections."""

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        validate_default=True,
    )


# ---------------------------------------------------------------------------
# Server Connection
# ---------------------------------------------------------------------------


class ServerConfig(ConfigBaseModel):
    """Docbox server connection configuration.

    Header values support ${VAR} interpolation, which keeps API keys out of
    the settings file.

    Attributes:
        url: Base URL of the docbox API.
        headers: Headers sent with every API request (tenant selection,
            authentication).
        timeout: Seconds to wait for a response.
        connect_timeout: Seconds to wait for a connection.
    """

    url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the docbox API",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every API request",
    )
    timeout: Annotated[float, Field(gt=0, description="Response timeout")] = 30.0
    connect_timeout: Annotated[
        float,
        Field(gt=0, description="Connection timeout"),
    ] = 10.0

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash from URL to avoid double slashes."""
        return v.rstrip("/")


# ---------------------------------------------------------------------------
# Task Polling and Uploads
# ---------------------------------------------------------------------------


class PollingConfig(ConfigBaseModel):
    """Task polling configuration.

    Attributes:
        interval_seconds: Time between status polls of a task.
    """

    interval_seconds: Annotated[
        float,
        Field(gt=0, le=3600, description="Seconds between task polls"),
    ] = 1.0


class UploadConfig(ConfigBaseModel):
    """Upload configuration.

    Attributes:
        chunk_size: Bytes per chunk when streaming upload bodies.
        strategy: Default upload protocol of the command line.
    """

    chunk_size: Annotated[
        int,
        Field(ge=1024, description="Bytes per streamed upload chunk"),
    ] = 65536
    strategy: UploadStrategy = Field(default=UploadStrategy.PRESIGNED)


# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------


class LoggingConfig(ConfigBaseModel):
    """Logging configuration.

    Attributes:
        level: Log verbosity level.
        format: Log output format.
    """

    level: LogLevel = Field(default=LogLevel.INFO)
    format: LogFormat = Field(default=LogFormat.AUTO)

    @property
    def force_colors(self) -> bool | None:
        """Color setting for :func:`configure_logging` (None auto-detects)."""
        match self.format:
            case LogFormat.CONSOLE:
                return True
            case LogFormat.LOGFMT:
                return False
            case _:
                return None


class ObservabilityConfig(ConfigBaseModel):
    """Observability configuration.

    Attributes:
        logging: Logging configuration.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
