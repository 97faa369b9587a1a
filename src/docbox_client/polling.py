"""Polling of server-side tasks until they reach a terminal state.

Every status resource the client polls (generic tasks and presigned upload
tasks) maps its response onto the :data:`TaskOutcome` tagged union, so a
single loop, :func:`await_completion`, serves all of them.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, assert_never

import structlog

from docbox_client.exceptions import (
    UPLOAD_TRACKING_ABORTED,
    DocboxCancelledError,
    ProcessingFailedError,
)


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from docbox_client.cancellation import CancelToken


__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "Completed",
    "Failed",
    "Pending",
    "SupportsOutcome",
    "TaskOutcome",
    "await_completion",
]


DEFAULT_POLL_INTERVAL = 1.0

_logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Pending:
    """The task has not reached a terminal state yet."""


@dataclass(frozen=True)
class Completed[T]:
    """The task finished successfully.

    Attributes:
        output: The payload produced by the task.
    """

    output: T


@dataclass(frozen=True)
class Failed:
    """The task finished with an error.

    Attributes:
        error: The server-supplied error message, if any.
    """

    error: str | None = None


type TaskOutcome[T] = Pending | Completed[T] | Failed


class SupportsOutcome[T](Protocol):
    """A status snapshot that can be interpreted as a :data:`TaskOutcome`."""

    def outcome(self) -> TaskOutcome[T]:
        """Return the outcome this snapshot represents."""
        ...


async def await_completion[T](
    fetch: Callable[[], Awaitable[SupportsOutcome[T]]],
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    cancel: CancelToken | None = None,
    task_id: str | None = None,
    aborted_message: str = UPLOAD_TRACKING_ABORTED,
) -> T:
    """Poll a task until it completes, fails, or is cancelled.

    Each iteration issues exactly one status fetch. There is no retry of
    failed fetches and no upper bound on the number of polls; callers that
    need a deadline fire the cancellation token.

    Args:
        fetch: Performs one status request and returns the snapshot.
        interval: Seconds to wait between polls. Must be positive.
        cancel: Token that stops the loop at the next check or during the
            sleep between polls.
        task_id: Task identifier, used for logging and error context.
        aborted_message: Message of the error raised on cancellation.

    Returns:
        The output carried by the completed snapshot.

    Raises:
        ValueError: If ``interval`` is not positive.
        ProcessingFailedError: If the task finished in the failed state.
        DocboxCancelledError: If the token fired between polls. A token that
            fires while ``fetch`` is in flight surfaces the fetch's own
            cancellation error instead, such as "request aborted" from
            ``DocboxClient.request``.
        DocboxError: Any error raised by ``fetch`` is propagated unchanged.
    """
    if interval <= 0:
        msg = f"Poll interval must be positive, got {interval}"
        raise ValueError(msg)

    log = _logger.bind(task_id=task_id)
    polls = 0

    while cancel is None or not cancel.cancelled:
        snapshot = await fetch()
        polls += 1
        outcome = snapshot.outcome()

        match outcome:
            case Completed(output=output):
                log.debug("task_completed", polls=polls)
                return output
            case Failed(error=error):
                log.warning("task_failed", polls=polls, error=error)
                raise ProcessingFailedError(error, task_id=task_id)
            case Pending():
                log.debug("task_pending", polls=polls)
            case _:
                assert_never(outcome)

        if cancel is None:
            await asyncio.sleep(interval)
        elif await cancel.sleep(interval):
            break

    log.info("task_poll_cancelled", polls=polls)
    raise DocboxCancelledError(aborted_message)
