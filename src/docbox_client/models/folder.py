"""Pydantic models for folders."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Annotated, Literal

from pydantic import Field

from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.file import DocFile  # noqa: TC001
from docbox_client.models.link import DocLink  # noqa: TC001
from docbox_client.models.shared import (  # noqa: TC001
    EditHistoryMetadataMoveToFolder,
    EditHistoryMetadataRename,
    EditHistoryType,
    FolderId,
)
from docbox_client.models.user import User  # noqa: TC001


__all__ = [
    "CreateFolder",
    "DocFolder",
    "FolderEditHistory",
    "FolderMoveToFolderEdit",
    "FolderPathSegment",
    "FolderRenameEdit",
    "FolderResponse",
    "ResolvedFolder",
    "UpdateFolder",
]


class DocFolder(DocboxBaseModel):
    """A folder within a document box.

    ``folder_id`` is None only for the root folder of a box.
    """

    id: FolderId
    name: str
    folder_id: FolderId | None = None
    created_at: datetime
    created_by: User | None = None
    last_modified_at: datetime | None = None
    last_modified_by: User | None = None


class FolderPathSegment(DocboxBaseModel):
    """One named step on the path to a folder."""

    id: FolderId
    name: str


class ResolvedFolder(DocboxBaseModel):
    """Path to a folder and its direct contents."""

    path: list[FolderPathSegment] = Field(default_factory=list)
    folders: list[DocFolder] = Field(default_factory=list)
    files: list[DocFile] = Field(default_factory=list)
    links: list[DocLink] = Field(default_factory=list)


class FolderResponse(DocboxBaseModel):
    """A folder together with its resolved contents."""

    folder: DocFolder
    children: ResolvedFolder


class CreateFolder(DocboxRequestModel):
    """Request to create a folder inside ``folder_id``."""

    name: str = Field(min_length=1)
    folder_id: FolderId


class UpdateFolder(DocboxRequestModel):
    """Partial update for a folder; None fields are left unchanged."""

    name: str | None = None
    folder_id: FolderId | None = None


class _FolderEditHistoryBase(DocboxBaseModel):
    id: str
    folder_id: FolderId
    user: User | None = None
    created_at: datetime


class FolderMoveToFolderEdit(_FolderEditHistoryBase):
    """Folder moved into another folder."""

    type: Literal[EditHistoryType.MOVE_TO_FOLDER]
    metadata: EditHistoryMetadataMoveToFolder


class FolderRenameEdit(_FolderEditHistoryBase):
    """Folder renamed."""

    type: Literal[EditHistoryType.RENAME]
    metadata: EditHistoryMetadataRename


FolderEditHistory = Annotated[
    FolderMoveToFolderEdit | FolderRenameEdit,
    Field(discriminator="type"),
]
