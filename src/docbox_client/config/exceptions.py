"""Errors raised while loading client configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docbox_client.exceptions import DocboxError


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = [
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
]


class ConfigurationError(DocboxError):
    """Base exception for configuration problems.

    Catching :class:`DocboxError` also catches these, so a command line
    front-end needs a single handler.
    """


class ConfigurationFileNotFoundError(ConfigurationError):
    """Raised when a required settings file does not exist.

    Attributes:
        path: The explicitly requested path, or None when searching defaults.
        searched_paths: Default locations that were tried.
    """

    def __init__(
        self,
        path: str | None = None,
        searched_paths: Sequence[str] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            path: The explicitly requested path.
            searched_paths: Default locations that were tried.
        """
        self.path = path
        self.searched_paths = list(searched_paths or [])

        if path:
            message = f"Configuration file not found: {path}"
        elif self.searched_paths:
            message = (
                "No configuration file found in: " + ", ".join(self.searched_paths)
            )
        else:
            message = "Configuration file not found"
        super().__init__(message)


class ConfigurationValidationError(ConfigurationError):
    """Raised when settings fail validation.

    Attributes:
        errors: Per-field error details as reported by pydantic.
    """

    def __init__(
        self,
        message: str,
        errors: Sequence[dict[str, object]] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Summary of the failure.
            errors: Per-field error details.
        """
        super().__init__(message)
        self.errors = list(errors or [])
