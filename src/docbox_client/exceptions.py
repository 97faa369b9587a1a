"""Custom exceptions for the docbox API client."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    import httpx


__all__ = [
    "DEFAULT_PROCESSING_ERROR",
    "UPLOAD_TRACKING_ABORTED",
    "DocboxAuthenticationError",
    "DocboxCancelledError",
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
]


DEFAULT_PROCESSING_ERROR = "Unknown error"
UPLOAD_TRACKING_ABORTED = "upload tracking aborted"


class DocboxError(Exception):
    """Base exception for all docbox client errors.

    Attributes:
        message: Human-readable error description.
        response: The HTTP response that caused this error, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            response: The HTTP response that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.response = response

    def __str__(self) -> str:
        """Return string representation with status code if available."""
        if self.response is not None:
            return f"{self.message} (status={self.response.status_code})"
        return self.message


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class DocboxHTTPError(DocboxError):
    """Raised when the docbox server answers with a non-success status.

    Attributes:
        status_code: HTTP status code of the failed response.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the transport error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code, defaults to the response status.
            response: The HTTP response that caused this error.
        """
        super().__init__(message, response=response)
        if status_code is None and response is not None:
            status_code = response.status_code
        self.status_code = status_code


class DocboxConnectionError(DocboxHTTPError):
    """Raised when the server cannot be reached.

    This includes network errors, DNS failures, and timeouts. There is no
    status code because no response was received.
    """

    def __init__(
        self,
        message: str = "Failed to connect to docbox",
        *,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the connection error.

        Args:
            message: Human-readable error description.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.__cause__ = cause


class DocboxAuthenticationError(DocboxHTTPError):
    """Raised for authentication failures (401/403)."""


class DocboxConflictError(DocboxHTTPError):
    """Raised when a resource already exists (409)."""


class DocboxServerError(DocboxHTTPError):
    """Raised for server errors (5xx)."""


class DocboxValidationError(DocboxHTTPError):
    """Raised for rejected requests (400/422).

    Attributes:
        errors: Error body returned by the server, if it was a JSON object.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: dict[str, object] | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the validation error.

        Args:
            message: Human-readable error description.
            errors: Parsed error body.
            response: The HTTP response that caused this error.
        """
        super().__init__(message, response=response)
        self.errors = errors or {}


# ---------------------------------------------------------------------------
# Resource lookup errors
# ---------------------------------------------------------------------------


class DocboxNotFoundError(DocboxError):
    """Raised when a resource lookup returns 404.

    Attributes:
        resource_type: The kind of resource that was not found.
        resource_id: The identifier that was looked up.
    """

    resource_type = "resource"

    def __init__(
        self,
        resource_id: str,
        *,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the not found error.

        Args:
            resource_id: The identifier that was not found.
            response: The HTTP response that caused this error.
        """
        super().__init__(f"{self.resource_type} not found", response=response)
        self.resource_id = resource_id


class DocumentBoxNotFoundError(DocboxNotFoundError):
    """Raised when a document box does not exist."""

    resource_type = "document box"


class FolderNotFoundError(DocboxNotFoundError):
    """Raised when a folder does not exist."""

    resource_type = "folder"


class LinkNotFoundError(DocboxNotFoundError):
    """Raised when a link does not exist."""

    resource_type = "link"


class DocboxFileNotFoundError(DocboxNotFoundError):
    """Raised when a file does not exist."""

    resource_type = "file"


# ---------------------------------------------------------------------------
# Task errors
# ---------------------------------------------------------------------------


class ProcessingFailedError(DocboxError):
    """Raised when a server-side task finishes in the failed state.

    Attributes:
        task_id: The task that failed, if known.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        task_id: str | None = None,
    ) -> None:
        """Initialize the processing error.

        Args:
            message: Error reported by the server.
            task_id: The task that failed.
        """
        super().__init__(message or DEFAULT_PROCESSING_ERROR)
        self.task_id = task_id


class DocboxCancelledError(DocboxError):
    """Raised when a cancellation token fires before or during an operation."""

    def __init__(self, message: str = "operation cancelled") -> None:
        """Initialize the cancellation error.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
