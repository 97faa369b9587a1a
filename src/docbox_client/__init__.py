"""Async Python client for the docbox document storage service."""

from __future__ import annotations

from docbox_client.cancellation import CancelToken
from docbox_client.client import DocboxClient
from docbox_client.exceptions import (
    DocboxAuthenticationError,
    DocboxCancelledError,
    DocboxConflictError,
    DocboxConnectionError,
    DocboxError,
    DocboxFileNotFoundError,
    DocboxHTTPError,
    DocboxNotFoundError,
    DocboxServerError,
    DocboxValidationError,
    DocumentBoxNotFoundError,
    FolderNotFoundError,
    LinkNotFoundError,
    ProcessingFailedError,
)
from docbox_client.upload import UploadPayload, UploadPhase, UploadProgress


__version__ = "0.1.0"


__all__ = [
    "CancelToken",
    "DocboxAuthenticationError",
    "DocboxCancelledError",
    "DocboxClient",
    "DocboxConflictError",
    "DocboxConnectionError",
    "DocboxError",
    "DocboxFileNotFoundError",
    "DocboxHTTPError",
    "DocboxNotFoundError",
    "DocboxServerError",
    "DocboxValidationError",
    "DocumentBoxNotFoundError",
    "FolderNotFoundError",
    "LinkNotFoundError",
    "ProcessingFailedError",
    "UploadPayload",
    "UploadPhase",
    "UploadProgress",
    "__version__",
]
