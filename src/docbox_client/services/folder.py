"""Folder operations."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from docbox_client.exceptions import DocboxHTTPError, FolderNotFoundError
from docbox_client.models import (
    CreateFolder,
    DocumentBoxScope,
    FolderEditHistory,
    FolderId,
    FolderResponse,
    UpdateFolder,
)
from docbox_client.services._base import BaseService, is_not_found


__all__ = ["FolderService"]


_EDIT_HISTORY = TypeAdapter(list[FolderEditHistory])


class FolderService(BaseService):
    """Create, load, update and delete folders."""

    async def create(
        self,
        scope: DocumentBoxScope,
        request: CreateFolder,
    ) -> FolderResponse:
        """Create a folder inside ``request.folder_id``."""
        data = await self._client.http_post(
            f"box/{scope}/folder",
            json=request.to_payload(),
        )
        return FolderResponse.model_validate(data)

    async def get(self, scope: DocumentBoxScope, folder_id: FolderId) -> FolderResponse:
        """Get a folder and its contents.

        Raises:
            FolderNotFoundError: If the folder does not exist.
        """
        try:
            data = await self._client.http_get(f"box/{scope}/folder/{folder_id}")
        except DocboxHTTPError as exc:
            if is_not_found(exc):
                raise FolderNotFoundError(folder_id, response=exc.response) from None
            raise
        return FolderResponse.model_validate(data)

    async def get_or_none(
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
    ) -> FolderResponse | None:
        """Get a folder, or None if it does not exist."""
        try:
            return await self.get(scope, folder_id)
        except FolderNotFoundError:
            return None

    async def update(
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
        request: UpdateFolder,
    ) -> None:
        """Rename or move a folder."""
        await self._client.http_put(
            f"box/{scope}/folder/{folder_id}",
            json=request.to_payload(),
        )

    async def delete(
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
        *,
        allow_missing: bool = False,
    ) -> Any:  # noqa: ANN401
        """Delete a folder and everything inside it."""
        return await self._delete(
            f"box/{scope}/folder/{folder_id}",
            allow_missing=allow_missing,
        )

    async def edit_history(
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
    ) -> list[FolderEditHistory]:
        """Get the edit history of a folder."""
        data = await self._client.http_get(
            f"box/{scope}/folder/{folder_id}/edit-history",
        )
        return _EDIT_HISTORY.validate_python(data)
