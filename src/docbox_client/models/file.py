"""Pydantic models for files, generated files and uploads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Discriminator, Field, Tag

from docbox_client.models.base import DocboxBaseModel, DocboxRequestModel
from docbox_client.models.shared import (  # noqa: TC001
    EditHistoryMetadataMoveToFolder,
    EditHistoryMetadataRename,
    EditHistoryType,
    FileId,
    FolderId,
    GeneratedFileId,
)
from docbox_client.models.user import User  # noqa: TC001
from docbox_client.polling import Completed, Failed, Pending, TaskOutcome


__all__ = [
    "DocFile",
    "EmailProcessingConfig",
    "FileEditHistory",
    "FileMoveToFolderEdit",
    "FileRenameEdit",
    "FileResponse",
    "GeneratedFile",
    "GeneratedFileType",
    "PresignedDownloadResponse",
    "PresignedStatusComplete",
    "PresignedStatusFailed",
    "PresignedStatusPending",
    "PresignedStatusResponse",
    "PresignedUploadFileRequest",
    "PresignedUploadResponse",
    "PresignedUploadStatus",
    "ProcessingConfig",
    "UpdateFile",
    "UploadFileResponse",
    "UploadTaskResponse",
]


class GeneratedFileType(StrEnum):
    """Kinds of artifacts produced by processing an uploaded file."""

    PDF = "Pdf"
    COVER_PAGE = "CoverPage"
    SMALL_THUMBNAIL = "SmallThumbnail"
    LARGE_THUMBNAIL = "LargeThumbnail"
    TEXT_CONTENT = "TextContent"
    HTML_CONTENT = "HtmlContent"
    METADATA = "Metadata"


class DocFile(DocboxBaseModel):
    """A file stored within a document box.

    ``last_modified_by`` is the user of the most recent modification, which
    may be None even when earlier modifications had a known user.
    """

    id: FileId
    name: str
    mime: str
    folder_id: FolderId
    hash: str
    size: int
    encrypted: bool = False
    created_at: datetime
    created_by: User | None = None
    last_modified_at: datetime | None = None
    last_modified_by: User | None = None
    parent_id: FileId | None = None


class GeneratedFile(DocboxBaseModel):
    """An artifact derived from a file (thumbnail, extracted text, ...)."""

    id: GeneratedFileId
    file_id: FileId
    mime: str
    type: GeneratedFileType
    hash: str
    created_at: datetime


class FileResponse(DocboxBaseModel):
    """A file together with the files generated from it."""

    file: DocFile
    generated: list[GeneratedFile] = Field(default_factory=list)


class UploadFileResponse(FileResponse):
    """Result of an upload.

    When email attachment processing is enabled ``additional_files`` holds
    the upload results for the extracted attachments.
    """

    additional_files: list[UploadFileResponse] = Field(default_factory=list)


class EmailProcessingConfig(DocboxRequestModel):
    """Email specific processing options.

    Unknown keys are preserved for forward compatibility.
    """

    model_config = ConfigDict(extra="allow")

    skip_attachments: bool | None = None


class ProcessingConfig(DocboxRequestModel):
    """Options controlling how the server processes an uploaded file.

    Unknown keys are preserved for forward compatibility.
    """

    model_config = ConfigDict(extra="allow")

    email: EmailProcessingConfig | None = None


class PresignedUploadFileRequest(DocboxRequestModel):
    """Request to create a presigned upload target.

    ``size`` must equal the number of bytes later sent to the target;
    the server rejects a mismatching transfer.
    """

    name: str
    folder_id: FolderId
    size: int = Field(ge=0)
    mime: str
    parent_id: FileId | None = None
    processing_config: ProcessingConfig | None = None


class PresignedUploadResponse(DocboxBaseModel):
    """Where and how to send the bytes of a presigned upload."""

    task_id: str
    method: str
    uri: str
    headers: dict[str, str] = Field(default_factory=dict)


class PresignedDownloadResponse(DocboxBaseModel):
    """Presigned target for downloading raw file contents."""

    method: str = "GET"
    uri: str
    headers: dict[str, str] = Field(default_factory=dict)
    expires_at: datetime | None = None


class UploadTaskResponse(DocboxBaseModel):
    """Response to an upload that will be processed asynchronously."""

    task_id: str
    created_at: datetime | None = None


class UpdateFile(DocboxRequestModel):
    """Partial update for a file; None fields are left unchanged."""

    name: str | None = None
    folder_id: FolderId | None = None


# ---------------------------------------------------------------------------
# Presigned upload status
# ---------------------------------------------------------------------------


class PresignedUploadStatus(StrEnum):
    """Statuses of a presigned upload task."""

    PENDING = "Pending"
    COMPLETE = "Complete"
    FAILED = "Failed"


class PresignedStatusPending(DocboxBaseModel):
    """The upload is still being received or processed.

    Any status the client does not recognise is treated as pending.
    """

    status: str = PresignedUploadStatus.PENDING

    def outcome(self) -> TaskOutcome[FileResponse]:
        """Map this status to a polling outcome."""
        return Pending()


class PresignedStatusComplete(FileResponse):
    """The upload finished processing."""

    status: Literal[PresignedUploadStatus.COMPLETE] = PresignedUploadStatus.COMPLETE

    def outcome(self) -> TaskOutcome[FileResponse]:
        """Map this status to a polling outcome."""
        return Completed(FileResponse(file=self.file, generated=self.generated))


class PresignedStatusFailed(DocboxBaseModel):
    """The upload failed."""

    status: Literal[PresignedUploadStatus.FAILED] = PresignedUploadStatus.FAILED
    error: str | None = None

    def outcome(self) -> TaskOutcome[FileResponse]:
        """Map this status to a polling outcome."""
        return Failed(self.error)


def _presigned_status_tag(value: Any) -> str:  # noqa: ANN401
    """Pick the status variant, falling back to pending for unknown values."""
    if isinstance(value, dict):
        status = value.get("status")
    else:
        status = getattr(value, "status", None)
    if status in {PresignedUploadStatus.COMPLETE, PresignedUploadStatus.FAILED}:
        return str(status)
    return PresignedUploadStatus.PENDING.value


PresignedStatusResponse = Annotated[
    Annotated[PresignedStatusPending, Tag(PresignedUploadStatus.PENDING.value)]
    | Annotated[PresignedStatusComplete, Tag(PresignedUploadStatus.COMPLETE.value)]
    | Annotated[PresignedStatusFailed, Tag(PresignedUploadStatus.FAILED.value)],
    Discriminator(_presigned_status_tag),
]


# ---------------------------------------------------------------------------
# Edit history
# ---------------------------------------------------------------------------


class _FileEditHistoryBase(DocboxBaseModel):
    id: str
    file_id: FileId
    user: User | None = None
    created_at: datetime


class FileMoveToFolderEdit(_FileEditHistoryBase):
    """File moved between folders."""

    type: Literal[EditHistoryType.MOVE_TO_FOLDER]
    metadata: EditHistoryMetadataMoveToFolder


class FileRenameEdit(_FileEditHistoryBase):
    """File renamed."""

    type: Literal[EditHistoryType.RENAME]
    metadata: EditHistoryMetadataRename


FileEditHistory = Annotated[
    FileMoveToFolderEdit | FileRenameEdit,
    Field(discriminator="type"),
]
