"""Resource services of the docbox client."""

from __future__ import annotations

from docbox_client.services.admin import AdminService
from docbox_client.services.box import DocumentBoxService
from docbox_client.services.file import FileService
from docbox_client.services.folder import FolderService
from docbox_client.services.link import LinkService
from docbox_client.services.task import TaskService


__all__ = [
    "AdminService",
    "DocumentBoxService",
    "FileService",
    "FolderService",
    "LinkService",
    "TaskService",
]
