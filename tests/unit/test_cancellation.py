"""Unit tests for CancelToken."""

from __future__ import annotations

import asyncio
import time

import pytest

from docbox_client.cancellation import CancelToken
from docbox_client.exceptions import DocboxCancelledError


class TestCancelToken:
    """Tests for token state."""

    def test_initial_state(self) -> None:
        """Test a new token has not fired."""
        token = CancelToken()
        assert not token.cancelled
        assert token.reason is None

    def test_cancel_sets_reason_once(self) -> None:
        """Test the first reason wins and later calls are no-ops."""
        token = CancelToken()
        token.cancel("timeout")
        token.cancel("user")

        assert token.cancelled
        assert token.reason == "timeout"

    def test_raise_if_cancelled(self) -> None:
        """Test raise_if_cancelled only raises after firing."""
        token = CancelToken()
        token.raise_if_cancelled()

        token.cancel()
        with pytest.raises(DocboxCancelledError, match="stopped"):
            token.raise_if_cancelled("stopped")

    def test_repr(self) -> None:
        """Test the debug representation."""
        assert repr(CancelToken()) == "CancelToken(cancelled=False)"


class TestCancelTokenSleep:
    """Tests for cancellable sleeping."""

    async def test_sleep_elapses(self) -> None:
        """Test sleep returns False when the interval passes."""
        assert await CancelToken().sleep(0.01) is False

    async def test_sleep_on_fired_token_returns_immediately(self) -> None:
        """Test sleep returns True at once for a fired token."""
        token = CancelToken()
        token.cancel()

        started = time.monotonic()
        assert await token.sleep(30) is True
        assert time.monotonic() - started < 1.0

    async def test_sleep_interrupted(self) -> None:
        """Test firing the token wakes a sleeper."""
        token = CancelToken()
        asyncio.get_running_loop().call_later(0.02, token.cancel)

        started = time.monotonic()
        assert await token.sleep(30) is True
        assert time.monotonic() - started < 5.0

    async def test_wait(self) -> None:
        """Test wait returns after the token fires."""
        token = CancelToken()
        asyncio.get_running_loop().call_later(0.01, token.cancel)
        await asyncio.wait_for(token.wait(), timeout=5)
        assert token.cancelled


class TestCancelTokenRun:
    """Tests for racing awaitables against the token."""

    async def test_returns_result(self) -> None:
        """Test the awaitable's result is returned when not cancelled."""

        async def work() -> int:
            await asyncio.sleep(0)
            return 7

        assert await CancelToken().run(work()) == 7

    async def test_propagates_exception(self) -> None:
        """Test the awaitable's error propagates unchanged."""

        async def work() -> None:
            msg = "boom"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="boom"):
            await CancelToken().run(work())

    async def test_fired_token_never_starts_work(self) -> None:
        """Test a fired token prevents the awaitable from running."""
        started = False

        async def work() -> None:
            nonlocal started
            started = True

        token = CancelToken()
        token.cancel()

        with pytest.raises(DocboxCancelledError, match="too late"):
            await token.run(work(), "too late")

        assert not started

    async def test_cancels_running_work(self) -> None:
        """Test firing mid-flight cancels the awaitable."""
        cleaned_up = asyncio.Event()

        async def work() -> None:
            try:
                await asyncio.sleep(30)
            finally:
                cleaned_up.set()

        token = CancelToken()
        asyncio.get_running_loop().call_later(0.02, token.cancel)

        with pytest.raises(DocboxCancelledError):
            await token.run(work())

        assert cleaned_up.is_set()
