"""Pydantic models for search requests and results."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import Field, model_validator

from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.file import DocFile
from docbox_client.models.folder import DocFolder, FolderPathSegment
from docbox_client.models.link import DocLink
from docbox_client.models.shared import (  # noqa: TC001
    DocboxItemId,
    DocumentBoxScope,
    FolderId,
    UserId,
)


__all__ = [
    "AdminSearchRequest",
    "AdminSearchResponse",
    "AdminSearchResult",
    "DateRange",
    "FileSearchRequest",
    "FileSearchResponse",
    "PageMatch",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "SearchResultItemType",
]


class SearchResultItemType(StrEnum):
    """Kinds of items a search can return."""

    FILE = "File"
    FOLDER = "Folder"
    LINK = "Link"


class DateRange(DocboxRequestModel):
    """Date range filter; at least one bound must be given."""

    start: datetime | None = None
    end: datetime | None = None

    @model_validator(mode="after")
    def require_bound(self) -> DateRange:
        """Reject ranges with neither a start nor an end."""
        if self.start is None and self.end is None:
            msg = "DateRange requires a start or an end"
            raise ValueError(msg)
        return self


class SearchRequest(DocboxRequestModel):
    """Search within one document box.

    ``item_id`` and ``pages_offset`` are deprecated in favour of the
    per-file search endpoint.
    """

    query: str | None = None
    neural: bool | None = None
    mime: str | None = None
    include_name: bool | None = None
    include_content: bool | None = None
    created_at: DateRange | None = None
    modified: DateRange | None = None
    created_by: UserId | None = None
    folder_id: FolderId | None = None
    item_id: DocboxItemId | None = None
    size: int | None = None
    offset: int | None = None
    max_pages: int | None = None
    pages_offset: int | None = None


class AdminSearchRequest(SearchRequest):
    """Search across several document boxes."""

    scopes: list[DocumentBoxScope]


class FileSearchRequest(DocboxRequestModel):
    """Search within the contents of one file."""

    query: str | None = None
    offset: int | None = None
    limit: int | None = None


class PageMatch(DocboxBaseModel):
    """Content matches within one page."""

    page: int
    matches: list[str] = Field(default_factory=list)


class FileSearchResponse(DocboxBaseModel):
    """Page matches within one file."""

    total_hits: int = 0
    results: list[PageMatch] = Field(default_factory=list)


class _SearchResultBase(DocboxBaseModel):
    score: float = 0.0
    page_matches: list[PageMatch] = Field(default_factory=list)
    path: list[FolderPathSegment] = Field(default_factory=list)
    total_hits: int = 0


class FileSearchResult(_SearchResultBase, DocFile):
    """A file hit."""

    type: Literal[SearchResultItemType.FILE]


class FolderSearchResult(_SearchResultBase, DocFolder):
    """A folder hit."""

    type: Literal[SearchResultItemType.FOLDER]


class LinkSearchResult(_SearchResultBase, DocLink):
    """A link hit."""

    type: Literal[SearchResultItemType.LINK]


SearchResult = Annotated[
    FileSearchResult | FolderSearchResult | LinkSearchResult,
    Field(discriminator="type"),
]


class AdminFileSearchResult(FileSearchResult):
    """A file hit from a multi-box search."""

    scope: DocumentBoxScope


class AdminFolderSearchResult(FolderSearchResult):
    """A folder hit from a multi-box search."""

    scope: DocumentBoxScope


class AdminLinkSearchResult(LinkSearchResult):
    """A link hit from a multi-box search."""

    scope: DocumentBoxScope


AdminSearchResult = Annotated[
    AdminFileSearchResult | AdminFolderSearchResult | AdminLinkSearchResult,
    Field(discriminator="type"),
]


class SearchResponse(DocboxBaseModel):
    """Results of a document box search."""

    total_hits: int = 0
    results: list[SearchResult] = Field(default_factory=list)


class AdminSearchResponse(DocboxBaseModel):
    """Results of a multi-box search."""

    total_hits: int = 0
    results: list[AdminSearchResult] = Field(default_factory=list)
