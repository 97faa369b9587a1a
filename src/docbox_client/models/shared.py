"""Identifier aliases and edit history metadata shared across resources."""

from __future__ import annotations

from enum import StrEnum

from docbox_client.models.base import DocboxBaseModel


__all__ = [
    "DocboxItemId",
    "DocumentBoxScope",
    "EditHistoryMetadataLinkValue",
    "EditHistoryMetadataMoveToFolder",
    "EditHistoryMetadataRename",
    "EditHistoryType",
    "FileId",
    "FolderId",
    "GeneratedFileId",
    "LinkId",
    "TenantId",
    "UserId",
]


UserId = str
TenantId = str
FileId = str
GeneratedFileId = str
FolderId = str
LinkId = str
DocumentBoxScope = str
DocboxItemId = str


class EditHistoryType(StrEnum):
    """Kinds of recorded edits."""

    MOVE_TO_FOLDER = "MoveToFolder"
    RENAME = "Rename"
    LINK_VALUE = "LinkValue"


class EditHistoryMetadataMoveToFolder(DocboxBaseModel):
    """An item moved from one folder to another."""

    original_id: str
    target_id: str


class EditHistoryMetadataRename(DocboxBaseModel):
    """An item renamed."""

    original_name: str
    new_name: str


class EditHistoryMetadataLinkValue(DocboxBaseModel):
    """A link URL changed."""

    previous_value: str
    new_value: str
