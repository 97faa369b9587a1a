"""Shared plumbing for resource services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from docbox_client.exceptions import DocboxHTTPError


if TYPE_CHECKING:
    from docbox_client.client import DocboxClient


__all__ = ["BaseService", "is_not_found"]


def is_not_found(exc: DocboxHTTPError) -> bool:
    """Whether a transport error is a 404 response."""
    return exc.status_code == 404  # noqa: PLR2004


class BaseService:
    """Base class for services bound to a :class:`DocboxClient`."""

    def __init__(self, client: DocboxClient) -> None:
        """Initialize the service.

        Args:
            client: The client used to talk to the API.
        """
        self._client = client
        self._logger = structlog.get_logger(self.__module__)

    async def _delete(self, url: str, *, allow_missing: bool) -> Any:  # noqa: ANN401
        """Delete a resource, optionally treating 404 as success."""
        try:
            return await self._client.http_delete(url)
        except DocboxHTTPError as exc:
            if allow_missing and is_not_found(exc):
                self._logger.debug("delete_missing", path=url)
                return {}
            raise
