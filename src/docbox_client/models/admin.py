"""Pydantic models for tenant administration."""

from __future__ import annotations

from pydantic import Field

from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.box import DocumentBox  # noqa: TC001


__all__ = ["AdminDocumentBoxesRequest", "AdminDocumentBoxesResponse"]


class AdminDocumentBoxesRequest(DocboxRequestModel):
    """Page through the document boxes of the tenant."""

    size: int = Field(default=50, ge=1)
    offset: int = Field(default=0, ge=0)


class AdminDocumentBoxesResponse(DocboxBaseModel):
    """A page of document boxes."""

    results: list[DocumentBox] = Field(default_factory=list)
