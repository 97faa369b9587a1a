"""Structured logging for the docbox client.

The library only emits events; :func:`configure_logging` decides where
they go and how they look. An ``operation_id`` bound with
:func:`set_operation_id` rides along on every event of one upload or
polling chain.
"""

from __future__ import annotations

import logging
import sys
import uuid
from enum import StrEnum
from typing import Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)


__all__ = [
    "LogLevel",
    "clear_operation_context",
    "configure_logging",
    "generate_operation_id",
    "get_logger",
    "get_operation_id",
    "set_operation_id",
]

_OPERATION_ID = "operation_id"

# Leading logfmt columns; any other keys follow in event order.
_LOGFMT_KEY_ORDER = ["timestamp", "level", "event", _OPERATION_ID, "scope", "task_id"]


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_stdlib_level(self) -> int:
        return logging.getLevelNamesMapping()[self.name]


def generate_operation_id() -> str:
    return uuid.uuid4().hex[:8]


def get_operation_id() -> str | None:
    """Return the operation ID bound to the current context, if any."""
    operation_id: str | None = get_contextvars().get(_OPERATION_ID)
    return operation_id


def set_operation_id(operation_id: str | None = None) -> str:
    """Bind ``operation_id`` (or a fresh one) to the current context."""
    operation_id = operation_id or generate_operation_id()
    bind_contextvars(**{_OPERATION_ID: operation_id})
    return operation_id


def clear_operation_context() -> None:
    """Unbind the operation ID together with all other context variables."""
    clear_contextvars()


def _stderr_is_tty() -> bool:
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    *,
    force_colors: bool | None = None,
) -> None:
    """Route structlog and stdlib logging to stderr.

    Args:
        level: Minimum level, as a :class:`LogLevel` or its name in any case.
        force_colors: True renders colored console lines, False renders
            logfmt. Left as None, the choice follows whether stderr is a TTY.

    Raises:
        ValueError: If ``level`` names no known level.
    """
    min_level = LogLevel(level.lower()).to_stdlib_level()
    colors = _stderr_is_tty() if force_colors is None else force_colors

    renderer: structlog.typing.Processor
    if colors:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    else:
        renderer = structlog.processors.LogfmtRenderer(
            key_order=_LOGFMT_KEY_ORDER,
            drop_missing=True,
            bool_as_flag=False,
        )

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # httpx logs through stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=min_level,
        force=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> Any:  # noqa: ANN401
    """Return a lazily configured structlog logger bound to ``initial_context``."""
    return structlog.get_logger(name, **initial_context)
