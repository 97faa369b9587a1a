"""Cooperative cancellation for upload and polling chains.

A single :class:`CancelToken` is shared by reference between the caller and
every suspension point of one logical operation (HTTP requests and the sleeps
between task polls). Firing it never interrupts code forcibly; each
suspension point observes the token and stops at its next check.

Example:
    ```python
    token = CancelToken()
    asyncio.get_running_loop().call_later(30.0, token.cancel)

    result = await client.file.upload_presigned(
        "tenant-a", folder_id, Path("report.pdf"), cancel=token
    )
    ```
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from docbox_client.exceptions import DocboxCancelledError


if TYPE_CHECKING:
    from collections.abc import Awaitable


__all__ = ["CancelToken"]


class CancelToken:
    """Cancellation signal shared by the steps of one operation.

    Attributes:
        reason: Optional description supplied when the token was fired.
    """

    def __init__(self) -> None:
        """Create an unfired token."""
        self._event = asyncio.Event()
        self.reason: str | None = None

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"CancelToken(cancelled={self.cancelled})"

    @property
    def cancelled(self) -> bool:
        """Whether the token has been fired."""
        return self._event.is_set()

    def cancel(self, reason: str | None = None) -> None:
        """Fire the token. Subsequent calls are no-ops.

        Args:
            reason: Optional description kept for diagnostics.
        """
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    def raise_if_cancelled(self, message: str = "operation cancelled") -> None:
        """Raise if the token has already been fired.

        Args:
            message: Message for the raised error.

        Raises:
            DocboxCancelledError: If the token is fired.
        """
        if self.cancelled:
            raise DocboxCancelledError(message)

    async def wait(self) -> None:
        """Block until the token is fired."""
        await self._event.wait()

    async def sleep(self, seconds: float) -> bool:
        """Sleep for ``seconds`` or until the token fires.

        Args:
            seconds: Maximum time to sleep.

        Returns:
            True if the token fired, False if the full interval elapsed.
        """
        if self.cancelled:
            return True
        try:
            async with asyncio.timeout(seconds):
                await self._event.wait()
        except TimeoutError:
            return False
        return True

    async def run[T](
        self,
        awaitable: Awaitable[T],
        message: str = "operation cancelled",
    ) -> T:
        """Run an awaitable, aborting it when the token fires.

        Args:
            awaitable: The operation to run (typically an HTTP request).
            message: Message for the error raised on cancellation.

        Returns:
            The result of the awaitable.

        Raises:
            DocboxCancelledError: If the token fired first. The awaitable
                is cancelled before this is raised.
        """
        if self.cancelled:
            # Close the coroutine so it is never reported as un-awaited
            close = getattr(awaitable, "close", None)
            if close is not None:
                close()
            raise DocboxCancelledError(message)

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait(
                {task, waiter},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task.done() and not task.cancelled():
            return task.result()

        # Let the aborted request unwind before reporting
        await asyncio.gather(task, return_exceptions=True)
        raise DocboxCancelledError(message)
