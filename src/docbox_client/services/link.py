"""Link operations."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from docbox_client.exceptions import DocboxHTTPError, LinkNotFoundError
from docbox_client.models import (
    CreateLink,
    DocLink,
    DocumentBoxScope,
    LinkEditHistory,
    LinkId,
    LinkMetadata,
    UpdateLink,
)
from docbox_client.services._base import BaseService, is_not_found


__all__ = ["LinkService"]


_EDIT_HISTORY = TypeAdapter(list[LinkEditHistory])


class LinkService(BaseService):
    """Create, load, update and delete links, and fetch their website data."""

    def favicon_url(self, scope: DocumentBoxScope, link_id: LinkId) -> str:
        """Path of the favicon image of a link, relative to the API base."""
        return f"box/{scope}/link/{link_id}/favicon"

    def image_url(self, scope: DocumentBoxScope, link_id: LinkId) -> str:
        """Path of the social (OGP) image of a link, relative to the API base."""
        return f"box/{scope}/link/{link_id}/image"

    async def create(self, scope: DocumentBoxScope, request: CreateLink) -> DocLink:
        """Create a link inside ``request.folder_id``."""
        data = await self._client.http_post(
            f"box/{scope}/link",
            json=request.to_payload(),
        )
        return DocLink.model_validate(data)

    async def get(self, scope: DocumentBoxScope, link_id: LinkId) -> DocLink:
        """Get a link.

        Raises:
            LinkNotFoundError: If the link does not exist.
        """
        try:
            data = await self._client.http_get(f"box/{scope}/link/{link_id}")
        except DocboxHTTPError as exc:
            if is_not_found(exc):
                raise LinkNotFoundError(link_id, response=exc.response) from None
            raise
        return DocLink.model_validate(data)

    async def get_or_none(
        self,
        scope: DocumentBoxScope,
        link_id: LinkId,
    ) -> DocLink | None:
        """Get a link, or None if it does not exist."""
        try:
            return await self.get(scope, link_id)
        except LinkNotFoundError:
            return None

    async def metadata(self, scope: DocumentBoxScope, link_id: LinkId) -> LinkMetadata:
        """Get metadata resolved from the linked website.

        The server visits the website to answer, so this can be slow.
        """
        data = await self._client.http_get(f"box/{scope}/link/{link_id}/metadata")
        return LinkMetadata.model_validate(data)

    async def favicon(self, scope: DocumentBoxScope, link_id: LinkId) -> bytes:
        """Get the raw favicon image of a link."""
        return await self._client.http_get(
            self.favicon_url(scope, link_id),
            response_type="bytes",
        )

    async def image(self, scope: DocumentBoxScope, link_id: LinkId) -> bytes:
        """Get the raw social image of a link."""
        return await self._client.http_get(
            self.image_url(scope, link_id),
            response_type="bytes",
        )

    async def edit_history(
        self,
        scope: DocumentBoxScope,
        link_id: LinkId,
    ) -> list[LinkEditHistory]:
        """Get the edit history of a link."""
        data = await self._client.http_get(f"box/{scope}/link/{link_id}/edit-history")
        return _EDIT_HISTORY.validate_python(data)

    async def update(
        self,
        scope: DocumentBoxScope,
        link_id: LinkId,
        request: UpdateLink,
    ) -> None:
        """Rename, move or change the URL of a link."""
        await self._client.http_put(
            f"box/{scope}/link/{link_id}",
            json=request.to_payload(),
        )

    async def delete(
        self,
        scope: DocumentBoxScope,
        link_id: LinkId,
        *,
        allow_missing: bool = False,
    ) -> Any:  # noqa: ANN401
        """Delete a link."""
        return await self._delete(
            f"box/{scope}/link/{link_id}",
            allow_missing=allow_missing,
        )
