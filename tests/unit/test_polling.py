"""Unit tests for task polling."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any

import httpx
import pytest
import respx  # noqa: TC002

from docbox_client import DocboxClient  # noqa: TC001
from docbox_client.cancellation import CancelToken
from docbox_client.exceptions import (
    DocboxCancelledError,
    DocboxServerError,
    ProcessingFailedError,
)
from docbox_client.polling import (
    Completed,
    Failed,
    Pending,
    TaskOutcome,
    await_completion,
)


BASE_URL = "http://docbox.test"


@dataclass
class _Snapshot:
    result: TaskOutcome[Any]

    def outcome(self) -> TaskOutcome[Any]:
        return self.result


class _ScriptedFetch:
    """Returns the scripted outcomes in order, repeating the last one."""

    def __init__(self, *outcomes: TaskOutcome[Any]) -> None:
        self._outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self) -> _Snapshot:
        outcome = self._outcomes[min(self.calls, len(self._outcomes) - 1)]
        self.calls += 1
        return _Snapshot(outcome)


def _task_json(status: str, output_data: Any = None) -> dict[str, Any]:  # noqa: ANN401
    return {
        "id": "task-1",
        "document_box": "tenant-a",
        "status": status,
        "output_data": output_data,
        "created_at": "2025-03-01T10:00:00Z",
        "completed_at": None,
    }


# ---------------------------------------------------------------------------
# await_completion
# ---------------------------------------------------------------------------


class TestAwaitCompletion:
    """Tests for the generic polling loop."""

    async def test_completed_returns_output_without_extra_polls(self) -> None:
        """A completed first snapshot returns its output after one fetch."""
        fetch = _ScriptedFetch(Completed({"value": 42}))

        result = await await_completion(fetch, interval=0.01)

        assert result == {"value": 42}
        assert fetch.calls == 1

    async def test_polls_until_completed(self) -> None:
        """Pending snapshots are polled again after the interval."""
        fetch = _ScriptedFetch(Pending(), Pending(), Completed("done"))

        result = await await_completion(fetch, interval=0.01)

        assert result == "done"
        assert fetch.calls == 3

    async def test_failed_raises_server_message(self) -> None:
        """A failed snapshot raises with the server-supplied message."""
        fetch = _ScriptedFetch(Pending(), Failed("disk full"))

        with pytest.raises(ProcessingFailedError) as exc_info:
            await await_completion(fetch, interval=0.01, task_id="task-9")

        assert exc_info.value.message == "disk full"
        assert exc_info.value.task_id == "task-9"
        assert fetch.calls == 2

    async def test_failed_without_message_uses_default(self) -> None:
        """A failed snapshot without a message reports 'Unknown error'."""
        fetch = _ScriptedFetch(Failed())

        with pytest.raises(ProcessingFailedError, match="Unknown error"):
            await await_completion(fetch, interval=0.01)

    @pytest.mark.parametrize("interval", [0, -1.0])
    async def test_non_positive_interval_rejected(self, interval: float) -> None:
        """Zero or negative intervals are rejected before any fetch."""
        fetch = _ScriptedFetch(Completed(None))

        with pytest.raises(ValueError, match="positive"):
            await await_completion(fetch, interval=interval)

        assert fetch.calls == 0

    async def test_cancelled_before_start_issues_no_fetch(self) -> None:
        """A token fired before polling starts prevents every fetch."""
        fetch = _ScriptedFetch(Completed(None))
        token = CancelToken()
        token.cancel()

        with pytest.raises(DocboxCancelledError, match="upload tracking aborted"):
            await await_completion(fetch, interval=0.01, cancel=token)

        assert fetch.calls == 0

    async def test_cancel_during_sleep_stops_promptly(self) -> None:
        """Firing the token mid-sleep ends polling without another fetch."""
        fetch = _ScriptedFetch(Pending())
        token = CancelToken()
        asyncio.get_running_loop().call_later(0.05, token.cancel)

        started = time.monotonic()
        with pytest.raises(DocboxCancelledError, match="upload tracking aborted"):
            await await_completion(fetch, interval=30.0, cancel=token)

        assert time.monotonic() - started < 5.0
        assert fetch.calls == 1

    async def test_custom_aborted_message(self) -> None:
        """The cancellation message can be overridden."""
        token = CancelToken()
        token.cancel()

        with pytest.raises(DocboxCancelledError, match="waiting stopped"):
            await await_completion(
                _ScriptedFetch(Pending()),
                cancel=token,
                aborted_message="waiting stopped",
            )

    async def test_fetch_errors_propagate_without_retry(self) -> None:
        """Errors raised by the fetch are not retried or wrapped."""
        error = DocboxServerError("Server error: 503")
        calls = 0

        async def fetch() -> _Snapshot:
            nonlocal calls
            calls += 1
            raise error

        with pytest.raises(DocboxServerError) as exc_info:
            await await_completion(fetch, interval=0.01)

        assert exc_info.value is error
        assert calls == 1

    async def test_cancel_during_fetch_keeps_fetch_error(self) -> None:
        """A token fired mid-fetch surfaces the fetch's own cancellation."""
        token = CancelToken()

        async def fetch() -> _Snapshot:
            asyncio.get_running_loop().call_later(0.01, token.cancel)
            await token.run(asyncio.sleep(10), "request aborted")
            return _Snapshot(Pending())

        with pytest.raises(DocboxCancelledError, match="request aborted"):
            await await_completion(fetch, interval=0.01, cancel=token)


# ---------------------------------------------------------------------------
# TaskService
# ---------------------------------------------------------------------------


class TestTaskService:
    """Tests for task lookup and polling over HTTP."""

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_get_parses_task(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test fetching a task snapshot."""
        respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(200, json=_task_json("Pending")),
        )

        task = await client.task.get("tenant-a", "task-1")

        assert task.id == "task-1"
        assert task.document_box == "tenant-a"
        assert not task.is_terminal

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_finished_returns_output_data(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test polling until completion returns output_data."""
        route = respx_mock.get("/box/tenant-a/task/task-1").mock(
            side_effect=[
                httpx.Response(200, json=_task_json("Pending")),
                httpx.Response(200, json=_task_json("Completed", {"file": "x"})),
            ],
        )

        output = await client.task.finished("tenant-a", "task-1", interval=0.01)

        assert output == {"file": "x"}
        assert route.call_count == 2

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_finished_accepts_complete_spelling(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test 'Complete' is treated the same as 'Completed'."""
        respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(200, json=_task_json("Complete", [1, 2])),
        )

        assert await client.task.finished("tenant-a", "task-1") == [1, 2]

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_finished_failed_task(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test a failed task raises with output_data.error."""
        respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(
                200,
                json=_task_json("Failed", {"error": "unsupported format"}),
            ),
        )

        with pytest.raises(ProcessingFailedError, match="unsupported format"):
            await client.task.finished("tenant-a", "task-1")

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_finished_failed_task_without_error(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test a failed task without details reports 'Unknown error'."""
        respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(200, json=_task_json("Failed")),
        )

        with pytest.raises(ProcessingFailedError, match="Unknown error"):
            await client.task.finished("tenant-a", "task-1")

    @pytest.mark.respx(base_url=BASE_URL, assert_all_called=False)
    async def test_finished_pre_cancelled_sends_nothing(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test a fired token means zero status requests."""
        route = respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(200, json=_task_json("Pending")),
        )
        token = CancelToken()
        token.cancel()

        with pytest.raises(DocboxCancelledError, match="upload tracking aborted"):
            await client.task.finished("tenant-a", "task-1", cancel=token)

        assert route.call_count == 0

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_polling_terminal_task_is_repeatable(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test polling a completed task twice yields the same output."""
        respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(200, json=_task_json("Completed", {"n": 1})),
        )

        first = await client.task.finished("tenant-a", "task-1")
        second = await client.task.finished("tenant-a", "task-1")

        assert first == second == {"n": 1}

    @pytest.mark.respx(base_url=BASE_URL)
    async def test_status_error_propagates(
        self,
        client: DocboxClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test a failing status request ends polling with that error."""
        route = respx_mock.get("/box/tenant-a/task/task-1").mock(
            return_value=httpx.Response(503),
        )

        with pytest.raises(DocboxServerError):
            await client.task.finished("tenant-a", "task-1", interval=0.01)

        assert route.call_count == 1
