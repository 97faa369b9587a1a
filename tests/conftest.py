"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator  # noqa: TC003
from typing import Any

import pytest
import structlog

from docbox_client import DocboxClient
from docbox_client.config import clear_settings_cache
from docbox_client.observability import clear_operation_context


BASE_URL = "http://docbox.test"
STORAGE_URL = "https://storage.test/bucket/upload-key"


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Reset cached settings and logging configuration around each test."""
    clear_settings_cache()
    clear_operation_context()
    yield
    clear_settings_cache()
    clear_operation_context()
    structlog.reset_defaults()


@pytest.fixture
def base_url() -> str:
    """Base URL for test clients."""
    return BASE_URL


@pytest.fixture
async def client(base_url: str) -> AsyncGenerator[DocboxClient, None]:
    """A client pointing at the mocked docbox server."""
    async with DocboxClient(base_url, headers={"x-tenant-id": "acme"}) as c:
        yield c


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def folder_json() -> dict[str, Any]:
    """A root folder as returned by the API."""
    return {
        "id": "folder-root",
        "name": "Root",
        "folder_id": None,
        "created_at": "2025-03-01T10:00:00Z",
        "created_by": None,
    }


@pytest.fixture
def box_json(folder_json: dict[str, Any]) -> dict[str, Any]:
    """A document box response."""
    return {
        "document_box": {
            "scope": "tenant-a",
            "created_at": "2025-03-01T10:00:00Z",
        },
        "root": folder_json,
        "children": {"path": [], "folders": [], "files": [], "links": []},
    }


@pytest.fixture
def file_json() -> dict[str, Any]:
    """A stored file."""
    return {
        "id": "file-1",
        "name": "report.pdf",
        "mime": "application/pdf",
        "folder_id": "folder-root",
        "hash": "abc123",
        "size": 11,
        "encrypted": False,
        "created_at": "2025-03-01T10:05:00Z",
        "created_by": {"id": "user-1", "name": "Ada", "image_id": None},
        "parent_id": None,
    }


@pytest.fixture
def file_response_json(file_json: dict[str, Any]) -> dict[str, Any]:
    """A file with one generated thumbnail."""
    return {
        "file": file_json,
        "generated": [
            {
                "id": "gen-1",
                "file_id": "file-1",
                "mime": "image/png",
                "type": "SmallThumbnail",
                "hash": "def456",
                "created_at": "2025-03-01T10:06:00Z",
            },
        ],
    }
