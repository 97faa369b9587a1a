"""Observability helpers (structured logging)."""

from __future__ import annotations

from docbox_client.observability.logging import (
    LogLevel,
    clear_operation_context,
    configure_logging,
    generate_operation_id,
    get_logger,
    get_operation_id,
    set_operation_id,
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
