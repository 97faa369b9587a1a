"""Tenant administration operations.

These endpoints expose every document box of the tenant. Only call them from
trusted server-side code.
"""

from __future__ import annotations

from typing import Any

from docbox_client.models import (
    AdminDocumentBoxesRequest,
    AdminDocumentBoxesResponse,
    AdminSearchRequest,
    AdminSearchResponse,
)
from docbox_client.services._base import BaseService


__all__ = ["AdminService"]


class AdminService(BaseService):
    """Cross-box search, box listing and cache maintenance."""

    async def search(self, request: AdminSearchRequest) -> AdminSearchResponse:
        """Search across several document boxes."""
        data = await self._client.http_post(
            "admin/search",
            json=request.to_payload(),
        )
        return AdminSearchResponse.model_validate(data)

    async def document_boxes(
        self,
        request: AdminDocumentBoxesRequest | None = None,
    ) -> AdminDocumentBoxesResponse:
        """List the document boxes of the tenant, one page at a time."""
        request = request or AdminDocumentBoxesRequest()
        data = await self._client.http_post(
            "admin/boxes",
            json=request.to_payload(),
        )
        return AdminDocumentBoxesResponse.model_validate(data)

    async def flush_database_pool_cache(self) -> Any:  # noqa: ANN401
        """Flush the server's database connection pool cache."""
        self._logger.info("flush_database_pool_cache")
        return await self._client.http_post("admin/flush-db-cache")

    async def flush_tenant_cache(self) -> Any:  # noqa: ANN401
        """Flush the server's tenant cache."""
        self._logger.info("flush_tenant_cache")
        return await self._client.http_post("admin/flush-tenant-cache")
