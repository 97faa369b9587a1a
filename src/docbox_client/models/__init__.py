"""Pydantic models for docbox API requests and responses."""

from __future__ import annotations

from docbox_client.models.admin import (
    AdminDocumentBoxesRequest,
    AdminDocumentBoxesResponse,
)
from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.box import (
    CreateDocumentBox,
    CreatedDocumentBox,
    DocumentBox,
    DocumentBoxResponse,
    DocumentBoxStats,
)
from docbox_client.models.file import (
    DocFile,
    EmailProcessingConfig,
    FileEditHistory,
    FileMoveToFolderEdit,
    FileRenameEdit,
    FileResponse,
    GeneratedFile,
    GeneratedFileType,
    PresignedDownloadResponse,
    PresignedStatusComplete,
    PresignedStatusFailed,
    PresignedStatusPending,
    PresignedStatusResponse,
    PresignedUploadFileRequest,
    PresignedUploadResponse,
    PresignedUploadStatus,
    ProcessingConfig,
    UpdateFile,
    UploadFileResponse,
    UploadTaskResponse,
)
from docbox_client.models.folder import (
    CreateFolder,
    DocFolder,
    FolderEditHistory,
    FolderMoveToFolderEdit,
    FolderPathSegment,
    FolderRenameEdit,
    FolderResponse,
    ResolvedFolder,
    UpdateFolder,
)
from docbox_client.models.link import (
    CreateLink,
    DocLink,
    LinkEditHistory,
    LinkMetadata,
    LinkMoveToFolderEdit,
    LinkRenameEdit,
    LinkValueEdit,
    UpdateLink,
)
from docbox_client.models.search import (
    AdminSearchRequest,
    AdminSearchResponse,
    AdminSearchResult,
    DateRange,
    FileSearchRequest,
    FileSearchResponse,
    PageMatch,
    SearchRequest,
    SearchResponse,
    SearchResult,
    SearchResultItemType,
)
from docbox_client.models.shared import (
    DocboxItemId,
    DocumentBoxScope,
    EditHistoryMetadataLinkValue,
    EditHistoryMetadataMoveToFolder,
    EditHistoryMetadataRename,
    EditHistoryType,
    FileId,
    FolderId,
    GeneratedFileId,
    LinkId,
    TenantId,
    UserId,
)
from docbox_client.models.task import DocboxTask, DocboxTaskStatus
from docbox_client.models.user import User


__all__ = [
    "AdminDocumentBoxesRequest",
    "AdminDocumentBoxesResponse",
    "AdminSearchRequest",
    "AdminSearchResponse",
    "AdminSearchResult",
    "CreateDocumentBox",
    "CreateFolder",
    "CreateLink",
    "CreatedDocumentBox",
    "DateRange",
    "DocFile",
    "DocFolder",
    "DocLink",
    "DocboxBaseModel",
    "DocboxItemId",
    "DocboxRequestModel",
    "DocboxTask",
    "DocboxTaskStatus",
    "DocumentBox",
    "DocumentBoxResponse",
    "DocumentBoxScope",
    "DocumentBoxStats",
    "EditHistoryMetadataLinkValue",
    "EditHistoryMetadataMoveToFolder",
    "EditHistoryMetadataRename",
    "EditHistoryType",
    "EmailProcessingConfig",
    "FileEditHistory",
    "FileId",
    "FileMoveToFolderEdit",
    "FileRenameEdit",
    "FileResponse",
    "FileSearchRequest",
    "FileSearchResponse",
    "FolderEditHistory",
    "FolderId",
    "FolderMoveToFolderEdit",
    "FolderPathSegment",
    "FolderRenameEdit",
    "FolderResponse",
    "GeneratedFile",
    "GeneratedFileId",
    "GeneratedFileType",
    "LinkEditHistory",
    "LinkId",
    "LinkMetadata",
    "LinkMoveToFolderEdit",
    "LinkRenameEdit",
    "LinkValueEdit",
    "PageMatch",
    "PresignedDownloadResponse",
    "PresignedStatusComplete",
    "PresignedStatusFailed",
    "PresignedStatusPending",
    "PresignedStatusResponse",
    "PresignedUploadFileRequest",
    "PresignedUploadResponse",
    "PresignedUploadStatus",
    "ProcessingConfig",
    "ResolvedFolder",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "SearchResultItemType",
    "TenantId",
    "UpdateFile",
    "UpdateFolder",
    "UpdateLink",
    "UploadFileResponse",
    "UploadTaskResponse",
    "User",
    "UserId",
]
