"""Async HTTP client for the docbox API."""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator, Callable, Mapping
from typing import TYPE_CHECKING, Any, Literal, Self

import httpx
import structlog

from docbox_client.exceptions import (
    DocboxAuthenticationError,
    DocboxConflictError,
    DocboxConnectionError,
    DocboxHTTPError,
    DocboxServerError,
    DocboxValidationError,
)
from docbox_client.services import (
    AdminService,
    DocumentBoxService,
    FileService,
    FolderService,
    LinkService,
    TaskService,
)


if TYPE_CHECKING:
    from docbox_client.cancellation import CancelToken
    from docbox_client.config import Settings


__all__ = ["DocboxClient", "ResponseType", "UploadProgressHook"]


ResponseType = Literal["json", "text", "bytes", "response"]
UploadProgressHook = Callable[[float], None]


class DocboxClient:
    """Async client for the docbox REST API.

    Resource operations are grouped into services available as attributes
    (``document_box``, ``folder``, ``file``, ``link``, ``task``, ``admin``);
    the client itself is the HTTP capability they share.

    Example:
        ```python
        async with DocboxClient(
            base_url="http://docbox:8080",
            headers={"x-tenant-id": "tenant"},
        ) as client:
            box = await client.document_box.create("tenant-a")
            result = await client.file.upload_presigned(
                "tenant-a", box.root.id, Path("report.pdf")
            )
        ```

    Attributes:
        base_url: The base URL of the docbox API.
        timeout: Default timeout for requests.
        upload_chunk_size: Chunk size used when streaming upload bodies.
    """

    DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)
    DEFAULT_UPLOAD_CHUNK_SIZE = 65536
    # Uploads and raw downloads may take much longer than metadata calls
    TRANSFER_TIMEOUT = httpx.Timeout(300.0, connect=10.0)

    def __init__(  # noqa: PLR0913
        self,
        base_url: str,
        *,
        headers: Mapping[str, str] | None = None,
        timeout: httpx.Timeout | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
        upload_chunk_size: int | None = None,
    ) -> None:
        """Initialize the docbox client.

        Args:
            base_url: Base URL of the docbox API (e.g., "http://localhost:8080").
            headers: Extra headers sent with every API request
                (authentication, tenant selection).
            timeout: Optional custom timeout configuration.
            transport: Optional custom transport for testing or advanced config.
            http_client: Pre-configured client to use instead of creating one.
                Its lifecycle stays with the caller.
            upload_chunk_size: Chunk size for streamed upload bodies.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.upload_chunk_size = upload_chunk_size or self.DEFAULT_UPLOAD_CHUNK_SIZE
        self._extra_headers = dict(headers or {})
        self._transport = transport
        self._client: httpx.AsyncClient | None = http_client
        self._owns_client = http_client is None
        self._external_client: httpx.AsyncClient | None = None
        self._logger = structlog.get_logger(__name__)

        self.document_box = DocumentBoxService(self)
        self.task = TaskService(self)
        self.file = FileService(self)
        self.link = LinkService(self)
        self.folder = FolderService(self)
        self.admin = AdminService(self)

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Create a client from loaded configuration.

        Args:
            settings: Application settings.

        Returns:
            A client configured from the ``server`` and ``upload`` sections.
        """
        server = settings.server
        return cls(
            server.url,
            headers=server.headers,
            timeout=httpx.Timeout(server.timeout, connect=server.connect_timeout),
            upload_chunk_size=settings.upload.chunk_size,
        )

    @property
    def _headers(self) -> dict[str, str]:
        """Default headers for API requests."""
        return {
            "Accept": "application/json",
            **self._extra_headers,
        }

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"DocboxClient(base_url={self.base_url!r})"

    async def __aenter__(self) -> Self:
        """Enter async context and create HTTP client."""
        await self._ensure_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context and close HTTP client."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the HTTP client is initialized."""
        if self._client is None or (self._owns_client and self._client.is_closed):
            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}/",
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            )
            self._owns_client = True
        return self._client

    def _ensure_external_client(self) -> httpx.AsyncClient:
        """Client for absolute URLs; carries no API headers."""
        if self._external_client is None or self._external_client.is_closed:
            self._external_client = httpx.AsyncClient(timeout=self.TRANSFER_TIMEOUT)
        return self._external_client

    async def close(self) -> None:
        """Close the HTTP clients and release resources."""
        if (
            self._owns_client
            and self._client is not None
            and not self._client.is_closed
        ):
            await self._client.aclose()
            self._client = None
        if self._external_client is not None:
            await self._external_client.aclose()
            self._external_client = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    async def request(  # noqa: PLR0913
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,  # noqa: ANN401
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        response_type: ResponseType = "json",
        cancel: CancelToken | None = None,
        on_upload_progress: UploadProgressHook | None = None,
        timeout: httpx.Timeout | None = None,  # noqa: ASYNC109
    ) -> Any:  # noqa: ANN401
        """Execute an HTTP request and decode the response.

        Relative URLs are resolved against the API base URL and carry the
        default API headers. Absolute URLs (presigned storage targets) are
        sent without them.

        Args:
            method: HTTP method.
            url: API path (e.g. ``box/scope``) or absolute URL.
            params: Query parameters.
            json: JSON body data.
            data: Form fields.
            files: Multipart file parts.
            content: Raw request body.
            headers: Additional headers (merged with defaults).
            response_type: How to decode the response body.
            cancel: Token that aborts the request when fired.
            on_upload_progress: Called with the fraction of ``content`` sent.
            timeout: Override default timeout.

        Returns:
            The decoded body, or the response itself for ``"response"``.

        Raises:
            DocboxHTTPError: For non-success responses (see subclasses).
            DocboxConnectionError: For connection failures and timeouts.
            DocboxCancelledError: If the token fired before or during the
                request.
        """
        send = self._send(
            method,
            url,
            params=params,
            json=json,
            data=data,
            files=files,
            content=content,
            headers=headers,
            response_type=response_type,
            on_upload_progress=on_upload_progress,
            timeout=timeout,
        )
        if cancel is None:
            return await send
        return await cancel.run(send, "request aborted")

    async def _send(  # noqa: PLR0913
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None,
        json: Any | None,  # noqa: ANN401
        data: Mapping[str, Any] | None,
        files: Mapping[str, Any] | None,
        content: bytes | None,
        headers: Mapping[str, str] | None,
        response_type: ResponseType,
        on_upload_progress: UploadProgressHook | None,
        timeout: httpx.Timeout | None,  # noqa: ASYNC109
    ) -> Any:  # noqa: ANN401
        external = httpx.URL(url).is_absolute_url
        log = self._logger.bind(
            method=method,
            path=httpx.URL(url).host if external else url,
        )

        request_headers: dict[str, str] = {} if external else dict(self._headers)
        if headers:
            request_headers.update(headers)

        body: bytes | AsyncIterator[bytes] | None = content
        if content is not None and on_upload_progress is not None:
            body = self._progress_stream(content, on_upload_progress)
            request_headers["Content-Length"] = str(len(content))

        try:
            if external:
                external_client = self._ensure_external_client()
                response = await external_client.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    content=body,
                    headers=request_headers,
                    timeout=timeout or self.TRANSFER_TIMEOUT,
                )
            else:
                client = await self._ensure_client()
                response = await client.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    json=json,
                    data=dict(data) if data else None,
                    files=files,
                    content=body,
                    headers=request_headers,
                    timeout=timeout or self.timeout,
                )
        except httpx.TimeoutException as exc:
            log.warning("timeout_error", error=str(exc))
            raise DocboxConnectionError(
                message="Request timed out",
                cause=exc,
            ) from exc
        except httpx.TransportError as exc:
            log.warning("connection_error", error=str(exc))
            raise DocboxConnectionError(cause=exc) from exc

        # elapsed is unset for responses built already read, as mock transports do
        try:
            elapsed_ms: float | None = response.elapsed.total_seconds() * 1000
        except RuntimeError:
            elapsed_ms = None
        log.debug(
            "api_response",
            status_code=response.status_code,
            elapsed_ms=elapsed_ms,
        )

        self._raise_for_status(response)
        return self._decode(response, response_type)

    async def _progress_stream(
        self,
        content: bytes,
        on_progress: UploadProgressHook,
    ) -> AsyncIterator[bytes]:
        """Yield ``content`` in chunks, reporting the fraction sent."""
        total = len(content)
        if total == 0:
            on_progress(1.0)
            return

        view = memoryview(content)
        sent = 0
        while sent < total:
            chunk = bytes(view[sent : sent + self.upload_chunk_size])
            yield chunk
            sent += len(chunk)
            on_progress(sent / total)

    @staticmethod
    def _decode(response: httpx.Response, response_type: ResponseType) -> Any:  # noqa: ANN401
        """Decode a successful response body."""
        if response_type == "response":
            return response
        if response_type == "bytes":
            return response.content
        if response_type == "text":
            return response.text
        if not response.content:
            return None
        return response.json()

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise appropriate exception for error status codes."""
        if response.is_success:
            return

        status = response.status_code

        if status in {401, 403}:
            raise DocboxAuthenticationError(  # noqa: TRY003
                "Authentication failed",  # noqa: EM101
                response=response,
            )

        if status in {400, 422}:
            errors = None
            with contextlib.suppress(ValueError):
                errors = response.json()
            raise DocboxValidationError(  # noqa: TRY003
                "Validation error",  # noqa: EM101
                errors=errors if isinstance(errors, dict) else None,
                response=response,
            )

        if status == 409:  # noqa: PLR2004
            raise DocboxConflictError(  # noqa: TRY003
                "Resource already exists",  # noqa: EM101
                response=response,
            )

        if status >= 500:  # noqa: PLR2004
            raise DocboxServerError(  # noqa: TRY003
                f"Server error: {status}",  # noqa: EM102
                response=response,
            )

        raise DocboxHTTPError(  # noqa: TRY003
            f"Request failed: {status}",  # noqa: EM102
            response=response,
        )

    async def http_get(
        self,
        url: str,
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Send a GET request. See :meth:`request` for keyword arguments."""
        return await self.request("GET", url, **kwargs)

    async def http_post(
        self,
        url: str,
        json: Any | None = None,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Send a POST request. See :meth:`request` for keyword arguments."""
        return await self.request("POST", url, json=json, **kwargs)

    async def http_put(
        self,
        url: str,
        json: Any | None = None,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Send a PUT request. See :meth:`request` for keyword arguments."""
        return await self.request("PUT", url, json=json, **kwargs)

    async def http_patch(
        self,
        url: str,
        json: Any | None = None,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Send a PATCH request. See :meth:`request` for keyword arguments."""
        return await self.request("PATCH", url, json=json, **kwargs)

    async def http_delete(
        self,
        url: str,
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """Send a DELETE request. See :meth:`request` for keyword arguments."""
        return await self.request("DELETE", url, **kwargs)
