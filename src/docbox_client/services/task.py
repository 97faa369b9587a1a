"""Server-side task lookup and polling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docbox_client.models import DocboxTask, DocumentBoxScope
from docbox_client.polling import DEFAULT_POLL_INTERVAL, await_completion
from docbox_client.services._base import BaseService


if TYPE_CHECKING:
    from docbox_client.cancellation import CancelToken


__all__ = ["TaskService"]


class TaskService(BaseService):
    """Read asynchronous tasks and wait for them to finish."""

    async def get(
        self,
        scope: DocumentBoxScope,
        task_id: str,
        *,
        cancel: CancelToken | None = None,
    ) -> DocboxTask:
        """Get the current state of a task.

        Args:
            scope: Document box the task belongs to.
            task_id: ID of the task.
            cancel: Token that aborts the request.

        Returns:
            A snapshot of the task.
        """
        data = await self._client.http_get(
            f"box/{scope}/task/{task_id}",
            cancel=cancel,
        )
        return DocboxTask.model_validate(data)

    async def finished(
        self,
        scope: DocumentBoxScope,
        task_id: str,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        cancel: CancelToken | None = None,
    ) -> Any:  # noqa: ANN401
        """Poll a task until it completes and return its output.

        Args:
            scope: Document box the task belongs to.
            task_id: ID of the task.
            interval: Seconds between polls.
            cancel: Token that stops polling.

        Returns:
            The task's ``output_data``.

        Raises:
            ProcessingFailedError: If the task failed.
            DocboxCancelledError: If the token fired before completion.
        """

        async def fetch() -> DocboxTask:
            return await self.get(scope, task_id, cancel=cancel)

        return await await_completion(
            fetch,
            interval=interval,
            cancel=cancel,
            task_id=task_id,
        )
