"""File operations: uploads, metadata, raw contents and generated files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from pydantic import TypeAdapter

from docbox_client.exceptions import DocboxFileNotFoundError, DocboxHTTPError
from docbox_client.models import (
    DocFile,
    DocumentBoxScope,
    FileEditHistory,
    FileId,
    FileResponse,
    FileSearchRequest,
    FileSearchResponse,
    FolderId,
    GeneratedFile,
    GeneratedFileType,
    PresignedDownloadResponse,
    PresignedStatusResponse,
    PresignedUploadFileRequest,
    PresignedUploadResponse,
    ProcessingConfig,
    UpdateFile,
    UploadFileResponse,
)
from docbox_client.polling import DEFAULT_POLL_INTERVAL, await_completion
from docbox_client.services._base import BaseService, is_not_found
from docbox_client.upload import (
    ProgressCallback,
    UploadOrchestrator,
    UploadPayload,
    UploadSource,
)


if TYPE_CHECKING:
    from collections.abc import Mapping

    from docbox_client.cancellation import CancelToken
    from docbox_client.client import DocboxClient, ResponseType


__all__ = ["DEFAULT_PRESIGNED_EXPIRY", "FileService"]


# Seconds a presigned download link stays valid
DEFAULT_PRESIGNED_EXPIRY = 900

_CHILDREN = TypeAdapter(list[DocFile])
_EDIT_HISTORY = TypeAdapter(list[FileEditHistory])
_PRESIGNED_STATUS: TypeAdapter[PresignedStatusResponse] = TypeAdapter(
    PresignedStatusResponse,
)


class FileService(BaseService):
    """Upload files and read their metadata, contents and derivatives."""

    def __init__(self, client: DocboxClient) -> None:
        """Initialize the service.

        Args:
            client: The client used to talk to the API.
        """
        super().__init__(client)
        self._uploads = UploadOrchestrator(client)

    # -------------------------------------------------------------------------
    # URL builders
    # -------------------------------------------------------------------------

    def raw_url(self, scope: DocumentBoxScope, file_id: FileId) -> str:
        """Path of the raw contents of a file, relative to the API base."""
        return f"box/{scope}/file/{file_id}/raw"

    def raw_named_url(self, scope: DocumentBoxScope, file_id: FileId, name: str) -> str:
        """Like :meth:`raw_url` with a cosmetic file name for browser viewers."""
        return f"{self.raw_url(scope, file_id)}/{quote(name, safe='')}"

    def generated_raw_url(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
    ) -> str:
        """Path of the raw contents of a generated file."""
        return f"box/{scope}/file/{file_id}/generated/{generated_type}/raw"

    def generated_raw_named_url(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
        name: str,
    ) -> str:
        """Like :meth:`generated_raw_url` with a cosmetic file name."""
        base = self.generated_raw_url(scope, file_id, generated_type)
        return f"{base}/{quote(name, safe='')}"

    # -------------------------------------------------------------------------
    # Uploads
    # -------------------------------------------------------------------------

    async def upload(
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
        source: UploadSource,
        *,
        name: str | None = None,
        mime: str | None = None,
    ) -> UploadFileResponse:
        """Upload a file and wait for the server to process it in-request.

        Large files can exceed proxy timeouts this way; prefer
        :meth:`upload_presigned` or :meth:`upload_tracked`.

        Args:
            scope: Document box to upload into.
            folder_id: Folder to store the file in.
            source: Bytes or path of the file.
            name: Stored file name (defaults to the path's name).
            mime: Content type (guessed from the name when omitted).

        Returns:
            The processed file and its generated files.
        """
        payload = UploadPayload.from_source(source, name=name, mime=mime)
        data = await self._client.http_post(
            f"box/{scope}/file",
            data={"name": payload.name, "folder_id": folder_id},
            files={"file": (payload.name, payload.content, payload.mime)},
            timeout=self._client.TRANSFER_TIMEOUT,
        )
        return UploadFileResponse.model_validate(data)

    async def upload_tracked(  # noqa: PLR0913
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
        source: UploadSource,
        *,
        name: str | None = None,
        mime: str | None = None,
        fixed_id: FileId | None = None,
        parent_id: FileId | None = None,
        processing_config: ProcessingConfig | Mapping[str, object] | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        cancel: CancelToken | None = None,
    ) -> UploadFileResponse:
        """Upload in one request and poll the processing task.

        See :meth:`UploadOrchestrator.upload_tracked`.
        """
        return await self._uploads.upload_tracked(
            scope,
            folder_id,
            source,
            name=name,
            mime=mime,
            fixed_id=fixed_id,
            parent_id=parent_id,
            processing_config=processing_config,
            interval=interval,
            cancel=cancel,
        )

    async def upload_presigned(  # noqa: PLR0913
        self,
        scope: DocumentBoxScope,
        folder_id: FolderId,
        source: UploadSource,
        *,
        name: str | None = None,
        mime: str | None = None,
        parent_id: FileId | None = None,
        processing_config: ProcessingConfig | Mapping[str, object] | None = None,
        on_progress: ProgressCallback | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        cancel: CancelToken | None = None,
    ) -> FileResponse:
        """Upload through a presigned storage target.

        See :meth:`UploadOrchestrator.upload_presigned`.
        """
        return await self._uploads.upload_presigned(
            scope,
            folder_id,
            source,
            name=name,
            mime=mime,
            parent_id=parent_id,
            processing_config=processing_config,
            on_progress=on_progress,
            interval=interval,
            cancel=cancel,
        )

    async def perform_presigned_upload(
        self,
        payload: UploadPayload,
        target: PresignedUploadResponse,
        *,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> None:
        """Transfer bytes to an existing presigned target."""
        await self._uploads.perform_presigned_upload(
            payload,
            target,
            on_progress=on_progress,
            cancel=cancel,
        )

    async def create_presigned_upload(
        self,
        scope: DocumentBoxScope,
        request: PresignedUploadFileRequest,
        *,
        cancel: CancelToken | None = None,
    ) -> PresignedUploadResponse:
        """Request a storage target for a presigned upload."""
        data = await self._client.http_post(
            f"box/{scope}/file/presigned",
            json=request.to_payload(),
            cancel=cancel,
        )
        return PresignedUploadResponse.model_validate(data)

    async def presigned_status(
        self,
        scope: DocumentBoxScope,
        task_id: str,
        *,
        cancel: CancelToken | None = None,
    ) -> PresignedStatusResponse:
        """Get the current status of a presigned upload task."""
        data = await self._client.http_get(
            f"box/{scope}/file/presigned/{task_id}",
            cancel=cancel,
        )
        return _PRESIGNED_STATUS.validate_python(data)

    async def presigned_finished(
        self,
        scope: DocumentBoxScope,
        task_id: str,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        cancel: CancelToken | None = None,
    ) -> FileResponse:
        """Poll a presigned upload task until the file is processed.

        Args:
            scope: Document box the upload targets.
            task_id: ID of the presigned upload task.
            interval: Seconds between polls.
            cancel: Token that stops polling.

        Returns:
            The processed file and its generated files.

        Raises:
            ProcessingFailedError: If processing failed.
            DocboxCancelledError: If the token fired before completion.
        """

        async def fetch() -> PresignedStatusResponse:
            return await self.presigned_status(scope, task_id, cancel=cancel)

        return await await_completion(
            fetch,
            interval=interval,
            cancel=cancel,
            task_id=task_id,
        )

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    async def get(self, scope: DocumentBoxScope, file_id: FileId) -> FileResponse:
        """Get a file and its generated files.

        Raises:
            DocboxFileNotFoundError: If the file does not exist.
        """
        try:
            data = await self._client.http_get(f"box/{scope}/file/{file_id}")
        except DocboxHTTPError as exc:
            if is_not_found(exc):
                raise DocboxFileNotFoundError(file_id, response=exc.response) from None
            raise
        return FileResponse.model_validate(data)

    async def get_or_none(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
    ) -> FileResponse | None:
        """Get a file, or None if it does not exist."""
        try:
            return await self.get(scope, file_id)
        except DocboxFileNotFoundError:
            return None

    async def search(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        request: FileSearchRequest,
    ) -> FileSearchResponse:
        """Search within the contents of one file."""
        data = await self._client.http_post(
            f"box/{scope}/file/{file_id}/search",
            json=request.to_payload(),
        )
        return FileSearchResponse.model_validate(data)

    async def children(self, scope: DocumentBoxScope, file_id: FileId) -> list[DocFile]:
        """Get files attached to a file (for example email attachments)."""
        data = await self._client.http_get(f"box/{scope}/file/{file_id}/children")
        return _CHILDREN.validate_python(data)

    async def edit_history(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
    ) -> list[FileEditHistory]:
        """Get the edit history of a file."""
        data = await self._client.http_get(f"box/{scope}/file/{file_id}/edit-history")
        return _EDIT_HISTORY.validate_python(data)

    async def update(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        request: UpdateFile,
    ) -> None:
        """Rename or move a file."""
        await self._client.http_put(
            f"box/{scope}/file/{file_id}",
            json=request.to_payload(),
        )

    async def delete(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        *,
        allow_missing: bool = False,
    ) -> Any:  # noqa: ANN401
        """Delete a file and its generated files."""
        return await self._delete(
            f"box/{scope}/file/{file_id}",
            allow_missing=allow_missing,
        )

    # -------------------------------------------------------------------------
    # Raw contents
    # -------------------------------------------------------------------------

    async def _download(self, url: str, response_type: ResponseType) -> Any:  # noqa: ANN401
        return await self._client.http_get(
            url,
            response_type=response_type,
            timeout=self._client.TRANSFER_TIMEOUT,
        )

    async def raw(self, scope: DocumentBoxScope, file_id: FileId) -> bytes:
        """Get the raw contents of a file."""
        return await self._download(self.raw_url(scope, file_id), "bytes")

    async def text(self, scope: DocumentBoxScope, file_id: FileId) -> str:
        """Get the contents of a text file."""
        return await self._download(self.raw_url(scope, file_id), "text")

    async def json(self, scope: DocumentBoxScope, file_id: FileId) -> Any:  # noqa: ANN401
        """Get the parsed contents of a JSON file."""
        return await self._download(self.raw_url(scope, file_id), "json")

    async def create_raw_presigned(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        expires_at: int = DEFAULT_PRESIGNED_EXPIRY,
    ) -> PresignedDownloadResponse:
        """Create a presigned download link for a file.

        Args:
            scope: Document box of the file.
            file_id: ID of the file.
            expires_at: Seconds until the link expires.

        Returns:
            The presigned download target.
        """
        data = await self._client.http_post(
            f"box/{scope}/file/{file_id}/raw-presigned",
            json={"expires_at": expires_at},
        )
        return PresignedDownloadResponse.model_validate(data)

    async def raw_presigned(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        expires_at: int = DEFAULT_PRESIGNED_EXPIRY,
    ) -> bytes:
        """Get the raw contents of a file through a presigned link."""
        target = await self.create_raw_presigned(scope, file_id, expires_at)
        return await self._download(target.uri, "bytes")

    # -------------------------------------------------------------------------
    # Generated files
    # -------------------------------------------------------------------------

    async def generated(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
    ) -> GeneratedFile:
        """Get the details of a generated file."""
        data = await self._client.http_get(
            f"box/{scope}/file/{file_id}/generated/{generated_type}",
        )
        return GeneratedFile.model_validate(data)

    async def generated_raw(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
    ) -> bytes:
        """Get the raw contents of a generated file."""
        url = self.generated_raw_url(scope, file_id, generated_type)
        return await self._download(url, "bytes")

    async def generated_text(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
    ) -> str:
        """Get the contents of a generated file as text."""
        url = self.generated_raw_url(scope, file_id, generated_type)
        return await self._download(url, "text")

    async def generated_json(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
    ) -> Any:  # noqa: ANN401
        """Get the parsed JSON contents of a generated file."""
        url = self.generated_raw_url(scope, file_id, generated_type)
        return await self._download(url, "json")

    async def create_generated_raw_presigned(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
        expires_at: int = DEFAULT_PRESIGNED_EXPIRY,
    ) -> PresignedDownloadResponse:
        """Create a presigned download link for a generated file."""
        data = await self._client.http_post(
            f"box/{scope}/file/{file_id}/generated/{generated_type}/raw-presigned",
            json={"expires_at": expires_at},
        )
        return PresignedDownloadResponse.model_validate(data)

    async def generated_raw_presigned(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
        expires_at: int = DEFAULT_PRESIGNED_EXPIRY,
    ) -> bytes:
        """Get a generated file's raw contents through a presigned link."""
        target = await self.create_generated_raw_presigned(
            scope, file_id, generated_type, expires_at
        )
        return await self._download(target.uri, "bytes")

    async def generated_text_presigned(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
        expires_at: int = DEFAULT_PRESIGNED_EXPIRY,
    ) -> str:
        """Get a generated file as text through a presigned link."""
        target = await self.create_generated_raw_presigned(
            scope, file_id, generated_type, expires_at
        )
        return await self._download(target.uri, "text")

    async def generated_json_presigned(
        self,
        scope: DocumentBoxScope,
        file_id: FileId,
        generated_type: GeneratedFileType,
        expires_at: int = DEFAULT_PRESIGNED_EXPIRY,
    ) -> Any:  # noqa: ANN401
        """Get a generated file as parsed JSON through a presigned link."""
        target = await self.create_generated_raw_presigned(
            scope, file_id, generated_type, expires_at
        )
        return await self._download(target.uri, "json")
