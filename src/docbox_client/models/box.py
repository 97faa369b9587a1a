"""Pydantic models for document boxes."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.folder import DocFolder, ResolvedFolder  # noqa: TC001
from docbox_client.models.shared import DocumentBoxScope  # noqa: TC001


__all__ = [
    "CreateDocumentBox",
    "CreatedDocumentBox",
    "DocumentBox",
    "DocumentBoxResponse",
    "DocumentBoxStats",
]


class DocumentBox(DocboxBaseModel):
    """The root container for one scope."""

    scope: DocumentBoxScope
    created_at: datetime


class CreateDocumentBox(DocboxRequestModel):
    """Request to create a document box."""

    scope: DocumentBoxScope


class CreatedDocumentBox(DocboxBaseModel):
    """A freshly created document box and its root folder."""

    document_box: DocumentBox
    root: DocFolder


class DocumentBoxResponse(DocboxBaseModel):
    """A document box with its root folder and resolved contents.

    ``children`` is absent when the response comes from box creation.
    """

    document_box: DocumentBox
    root: DocFolder
    children: ResolvedFolder | None = None


class DocumentBoxStats(DocboxBaseModel):
    """Item counts for a document box.

    ``file_size`` is only reported by servers from v0.4.0.
    """

    total_files: int
    total_links: int
    total_folders: int
    file_size: int | None = None
