"""Pydantic models for server-side tasks."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Any

from pydantic import field_validator

from docbox_client.models.base import DocboxBaseModel
from docbox_client.models.shared import DocumentBoxScope  # noqa: TC001
from docbox_client.polling import Completed, Failed, Pending, TaskOutcome


__all__ = ["DocboxTask", "DocboxTaskStatus"]


class DocboxTaskStatus(StrEnum):
    """Statuses of a docbox task."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"


class DocboxTask(DocboxBaseModel):
    """Snapshot of an asynchronous task.

    The client only ever reads tasks; the server owns their lifecycle.
    Statuses other than the known terminal ones are kept as plain strings
    and treated as pending.
    """

    id: str
    document_box: DocumentBoxScope
    status: DocboxTaskStatus | str = DocboxTaskStatus.PENDING
    output_data: Any = None
    created_at: datetime | None = None
    completed_at: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: object) -> object:
        """Accept "Complete" as an alias of "Completed"."""
        if v == "Complete":
            return DocboxTaskStatus.COMPLETED
        return v

    @property
    def is_terminal(self) -> bool:
        """Whether the task has finished, successfully or not."""
        return self.status in {DocboxTaskStatus.COMPLETED, DocboxTaskStatus.FAILED}

    def outcome(self) -> TaskOutcome[Any]:
        """Map this snapshot to a polling outcome.

        Failed tasks report their message under ``output_data.error``.
        """
        if self.status == DocboxTaskStatus.COMPLETED:
            return Completed(self.output_data)
        if self.status == DocboxTaskStatus.FAILED:
            error = None
            if isinstance(self.output_data, dict):
                error = self.output_data.get("error")
            return Failed(error if isinstance(error, str) else None)
        return Pending()
