"""Pydantic models for links."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Annotated, Literal

from pydantic import Field

from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.shared import (  # noqa: TC001
    EditHistoryMetadataLinkValue,
    EditHistoryMetadataMoveToFolder,
    EditHistoryMetadataRename,
    EditHistoryType,
    FolderId,
    LinkId,
)
from docbox_client.models.user import User  # noqa: TC001


__all__ = [
    "CreateLink",
    "DocLink",
    "LinkEditHistory",
    "LinkMetadata",
    "LinkMoveToFolderEdit",
    "LinkRenameEdit",
    "LinkValueEdit",
    "UpdateLink",
]


class DocLink(DocboxBaseModel):
    """A URL stored within a document box."""

    id: LinkId
    name: str
    value: str
    folder_id: FolderId
    created_at: datetime
    created_by: User | None = None
    last_modified_at: datetime | None = None
    last_modified_by: User | None = None


class LinkMetadata(DocboxBaseModel):
    """Metadata the server resolved by visiting the linked website."""

    title: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    favicon: bool = False
    image: bool = False


class CreateLink(DocboxRequestModel):
    """Request to create a link."""

    name: str
    value: str
    folder_id: FolderId


class UpdateLink(DocboxRequestModel):
    """Partial update for a link; None fields are left unchanged."""

    name: str | None = None
    folder_id: FolderId | None = None
    value: str | None = None


class _LinkEditHistoryBase(DocboxBaseModel):
    id: str
    link_id: LinkId
    user: User | None = None
    created_at: datetime


class LinkMoveToFolderEdit(_LinkEditHistoryBase):
    """Link moved between folders."""

    type: Literal[EditHistoryType.MOVE_TO_FOLDER]
    metadata: EditHistoryMetadataMoveToFolder


class LinkRenameEdit(_LinkEditHistoryBase):
    """Link renamed."""

    type: Literal[EditHistoryType.RENAME]
    metadata: EditHistoryMetadataRename


class LinkValueEdit(_LinkEditHistoryBase):
    """Link URL changed."""

    type: Literal[EditHistoryType.LINK_VALUE]
    metadata: EditHistoryMetadataLinkValue


LinkEditHistory = Annotated[
    LinkMoveToFolderEdit | LinkRenameEdit | LinkValueEdit,
    Field(discriminator="type"),
]
