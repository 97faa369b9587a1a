"""Upload orchestration: send bytes and wait until the server processed them.

Two protocols are supported and both end in a typed file result:

* **Tracked upload**: a single multipart request carries metadata and
  content and asks the server to process it asynchronously. The returned
  task is polled until it finishes.
* **Presigned upload**: the client requests a storage target, transfers the
  bytes directly to it, then polls the presigned upload task.

Steps of one upload are strictly sequential. A single
:class:`~docbox_client.cancellation.CancelToken` governs every request and
poll of the chain.
"""

from __future__ import annotations

import json
import mimetypes
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import structlog

from docbox_client.models import (
    PresignedUploadFileRequest,
    ProcessingConfig,
    UploadFileResponse,
    UploadTaskResponse,
)
from docbox_client.polling import DEFAULT_POLL_INTERVAL


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from docbox_client.cancellation import CancelToken
    from docbox_client.client import DocboxClient
    from docbox_client.models import (
        FileId,
        FileResponse,
        FolderId,
        PresignedUploadResponse,
    )


__all__ = [
    "DEFAULT_MIME_TYPE",
    "ProgressCallback",
    "UploadOrchestrator",
    "UploadPayload",
    "UploadPhase",
    "UploadProgress",
    "UploadSource",
]


DEFAULT_MIME_TYPE = "application/octet-stream"

# Headers the transport computes itself and must not be copied from a target
_TRANSPORT_MANAGED_HEADERS = frozenset({"content-length", "host", "transfer-encoding"})


class UploadPhase(StrEnum):
    """Phases reported to an upload progress callback, in order."""

    PREPARING = "Preparing"
    STARTING = "Starting"
    UPLOADING = "Uploading"
    UPLOADED = "Uploaded"
    PROCESSING = "Processing"
    COMPLETE = "Complete"


@dataclass(frozen=True)
class UploadProgress:
    """A progress notification.

    Attributes:
        phase: The phase the upload entered or is in.
        progress: Fraction complete in [0, 1], or None when indeterminate.
    """

    phase: UploadPhase
    progress: float | None = None


type ProgressCallback = Callable[[UploadProgress], None]
type UploadSource = bytes | Path


@dataclass(frozen=True)
class UploadPayload:
    """Bytes to upload together with the name and type they are stored under."""

    name: str
    content: bytes
    mime: str

    @property
    def size(self) -> int:
        """Payload size in bytes."""
        return len(self.content)

    @classmethod
    def from_source(
        cls,
        source: UploadSource,
        *,
        name: str | None = None,
        mime: str | None = None,
    ) -> UploadPayload:
        """Build a payload from raw bytes or a file path.

        Args:
            source: The bytes to upload, or a path to read them from.
            name: Stored file name. Defaults to the path's name.
            mime: Content type. Guessed from the name when omitted.

        Returns:
            The payload.

        Raises:
            ValueError: If ``source`` is raw bytes and no name was given.
        """
        if isinstance(source, Path):
            content = source.read_bytes()
            name = name or source.name
        else:
            content = bytes(source)

        if not name:
            msg = "A file name is required when uploading raw bytes"
            raise ValueError(msg)

        if mime is None:
            mime = mimetypes.guess_type(name)[0] or DEFAULT_MIME_TYPE
        return cls(name=name, content=content, mime=mime)


def _processing_config_payload(
    config: ProcessingConfig | Mapping[str, object] | None,
) -> ProcessingConfig | None:
    if config is None or isinstance(config, ProcessingConfig):
        return config
    return ProcessingConfig.model_validate(config)


class UploadOrchestrator:
    """Runs upload protocols against a :class:`DocboxClient`.

    Progress callbacks are invoked synchronously at phase boundaries; an
    exception raised by a callback propagates out of the upload.
    """

    def __init__(self, client: DocboxClient) -> None:
        """Initialize the orchestrator.

        Args:
            client: The client whose HTTP capability and services are used.
        """
        self._client = client
        self._logger = structlog.get_logger(__name__)

    @staticmethod
    def _emit(
        on_progress: ProgressCallback | None,
        phase: UploadPhase,
        progress: float | None = None,
    ) -> None:
        if on_progress is not None:
            on_progress(UploadProgress(phase, progress))

    async def upload_tracked(  # noqa: PLR0913
        self,
        scope: str,
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
        """Upload in one request and wait for asynchronous processing.

        Args:
            scope: Document box to upload into.
            folder_id: Folder to store the file in.
            source: Bytes or path of the file.
            name: Stored file name (defaults to the path's name).
            mime: Content type (guessed from the name when omitted).
            fixed_id: Fixed ID for the new file (legacy API compatibility).
            parent_id: File to attach the new file to.
            processing_config: Options for server-side processing.
            interval: Seconds between task polls.
            cancel: Token aborting the upload or the polling.

        Returns:
            The processed file, its generated files and any extracted files.

        Raises:
            DocboxHTTPError: If a request fails.
            ProcessingFailedError: If processing failed on the server.
            DocboxCancelledError: If the token fired.
        """
        payload = UploadPayload.from_source(source, name=name, mime=mime)
        log = self._logger.bind(scope=scope, file_name=payload.name)

        form: dict[str, str] = {
            "name": payload.name,
            "folder_id": folder_id,
            "asynchronous": "true",
        }
        if fixed_id:
            form["fixed_id"] = fixed_id
        if parent_id:
            form["parent_id"] = parent_id
        config = _processing_config_payload(processing_config)
        if config is not None:
            form["processing_config"] = json.dumps(config.to_payload())

        log.info("upload_started", size=payload.size, strategy="tracked")
        response = await self._client.http_post(
            f"box/{scope}/file",
            data=form,
            files={"file": (payload.name, payload.content, payload.mime)},
            cancel=cancel,
            timeout=self._client.TRANSFER_TIMEOUT,
        )
        task = UploadTaskResponse.model_validate(response)
        log = log.bind(task_id=task.task_id)
        log.info("upload_task_created")

        output = await self._client.task.finished(
            scope,
            task.task_id,
            interval=interval,
            cancel=cancel,
        )
        result = UploadFileResponse.model_validate(output)
        log.info("upload_completed", file_id=result.file.id)
        return result

    async def upload_presigned(  # noqa: PLR0913
        self,
        scope: str,
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
        """Upload through a presigned storage target and wait for processing.

        Progress phases are reported in the order Preparing, Starting,
        Uploading (with fractions), Uploaded, Processing, Complete.

        Args:
            scope: Document box to upload into.
            folder_id: Folder to store the file in.
            source: Bytes or path of the file.
            name: Stored file name (defaults to the path's name).
            mime: Content type (guessed from the name when omitted).
            parent_id: File to attach the new file to.
            processing_config: Options for server-side processing.
            on_progress: Progress callback.
            interval: Seconds between task polls.
            cancel: Token aborting the transfer or the polling.

        Returns:
            The processed file and its generated files.

        Raises:
            DocboxHTTPError: If a request or the transfer fails.
            ProcessingFailedError: If processing failed on the server.
            DocboxCancelledError: If the token fired.
        """
        payload = UploadPayload.from_source(source, name=name, mime=mime)
        log = self._logger.bind(scope=scope, file_name=payload.name)

        self._emit(on_progress, UploadPhase.PREPARING)
        log.info("upload_started", size=payload.size, strategy="presigned")

        target = await self._client.file.create_presigned_upload(
            scope,
            PresignedUploadFileRequest(
                name=payload.name,
                folder_id=folder_id,
                size=payload.size,
                mime=payload.mime,
                parent_id=parent_id,
                processing_config=_processing_config_payload(processing_config),
            ),
            cancel=cancel,
        )
        log = log.bind(task_id=target.task_id)

        await self.perform_presigned_upload(
            payload,
            target,
            on_progress=on_progress,
            cancel=cancel,
        )
        log.info("upload_transferred")

        self._emit(on_progress, UploadPhase.PROCESSING)
        result = await self._client.file.presigned_finished(
            scope,
            target.task_id,
            interval=interval,
            cancel=cancel,
        )
        self._emit(on_progress, UploadPhase.COMPLETE, 1.0)
        log.info("upload_completed", file_id=result.file.id)
        return result

    async def perform_presigned_upload(
        self,
        payload: UploadPayload,
        target: PresignedUploadResponse,
        *,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> None:
        """Transfer the payload bytes to a presigned target.

        The target's headers are applied on top of the payload content type,
        except headers the transport computes itself (``Content-Length``).
        The target is not modified.

        Args:
            payload: The bytes to send.
            target: Presigned target returned by the server.
            on_progress: Progress callback.
            cancel: Token aborting the transfer.

        Raises:
            DocboxHTTPError: If the storage target rejects the transfer.
            DocboxCancelledError: If the token fired.
        """
        self._emit(on_progress, UploadPhase.STARTING)

        headers = httpx.Headers({"Content-Type": payload.mime})
        for key, value in target.headers.items():
            if key.lower() not in _TRANSPORT_MANAGED_HEADERS:
                headers[key] = value

        hook = None
        if on_progress is not None:

            def hook(fraction: float) -> None:
                if not fraction:
                    self._emit(on_progress, UploadPhase.UPLOADING)
                elif fraction >= 1:
                    self._emit(on_progress, UploadPhase.UPLOADED, 1.0)
                else:
                    self._emit(on_progress, UploadPhase.UPLOADING, fraction)

        await self._client.request(
            target.method.upper(),
            target.uri,
            content=payload.content,
            headers=dict(headers.items()),
            response_type="bytes",
            cancel=cancel,
            on_upload_progress=hook,
        )
