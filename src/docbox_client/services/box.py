"""Document box operations."""

from __future__ import annotations

from typing import Any

from docbox_client.exceptions import (
    DocboxConflictError,
    DocboxHTTPError,
    DocumentBoxNotFoundError,
)
from docbox_client.models import (
    CreateDocumentBox,
    DocumentBoxResponse,
    DocumentBoxScope,
    DocumentBoxStats,
    SearchRequest,
    SearchResponse,
)
from docbox_client.services._base import BaseService, is_not_found


__all__ = ["DocumentBoxService"]


class DocumentBoxService(BaseService):
    """Create, load, search and delete document boxes."""

    async def get(
        self,
        scope: DocumentBoxScope,
        *,
        create_if_missing: bool = False,
    ) -> DocumentBoxResponse:
        """Get the document box for a scope.

        Args:
            scope: Scope of the document box.
            create_if_missing: Create the box when it does not exist yet.

        Returns:
            The document box, its root folder and the root's contents.

        Raises:
            DocumentBoxNotFoundError: If the box does not exist and
                ``create_if_missing`` is False.
        """
        try:
            data = await self._client.http_get(f"box/{scope}")
        except DocboxHTTPError as exc:
            if not is_not_found(exc):
                raise
            if create_if_missing:
                self._logger.info("document_box_missing_creating", scope=scope)
                return await self.create(scope, allow_existing=False)
            raise DocumentBoxNotFoundError(scope, response=exc.response) from None
        return DocumentBoxResponse.model_validate(data)

    async def get_or_none(self, scope: DocumentBoxScope) -> DocumentBoxResponse | None:
        """Get the document box for a scope, or None if it does not exist."""
        try:
            return await self.get(scope)
        except DocumentBoxNotFoundError:
            return None

    async def create(
        self,
        scope: DocumentBoxScope,
        *,
        allow_existing: bool = True,
    ) -> DocumentBoxResponse:
        """Create a document box.

        Args:
            scope: Scope of the new document box.
            allow_existing: Return the existing box when the scope is taken.

        Returns:
            The created (or existing) document box.

        Raises:
            DocboxConflictError: If the box exists and ``allow_existing`` is
                False.
        """
        try:
            data = await self._client.http_post(
                "box",
                json=CreateDocumentBox(scope=scope).to_payload(),
            )
        except DocboxConflictError:
            if not allow_existing:
                raise
            self._logger.debug("document_box_exists", scope=scope)
            return await self.get(scope)
        self._logger.info("document_box_created", scope=scope)
        return DocumentBoxResponse.model_validate(data)

    async def delete(
        self,
        scope: DocumentBoxScope,
        *,
        allow_missing: bool = True,
    ) -> Any:  # noqa: ANN401
        """Delete a document box and everything inside it.

        A box that does not exist counts as deleted unless
        ``allow_missing`` is False.

        Returns:
            The server's response body, or ``{}`` for a missing box.
        """
        return await self._delete(f"box/{scope}", allow_missing=allow_missing)

    async def search(
        self,
        scope: DocumentBoxScope,
        request: SearchRequest,
    ) -> SearchResponse:
        """Search files, folders and links within a document box."""
        data = await self._client.http_post(
            f"box/{scope}/search",
            json=request.to_payload(),
        )
        return SearchResponse.model_validate(data)

    async def stats(self, scope: DocumentBoxScope) -> DocumentBoxStats:
        """Get item counts for a document box."""
        data = await self._client.http_get(f"box/{scope}/stats")
        return DocumentBoxStats.model_validate(data)
