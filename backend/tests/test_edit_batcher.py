"""Tests for the coalescing edit batcher."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from client.batcher import EditBatcher
from shared.utils import setup_logging

setup_logging("test-edit-batcher", log_level="CRITICAL")


class TestEditBatcher:
    """Coalescing, size and timer flushes."""

    @pytest.mark.asyncio
    async def test_coalesces_latest_value_per_key(self) -> None:
        send = AsyncMock()
        batcher = EditBatcher(send, flush_interval=60, max_pending=50)

        await batcher.add("s1", "title", "A")
        await batcher.add("s1", "subtitle", "Sub")
        await batcher.add("s1", "title", "B")

        assert batcher.pending_count == 2
        assert await batcher.flush() == 2
        send.assert_awaited_once_with([("s1", "title", "B"), ("s1", "subtitle", "Sub")])
        assert batcher.pending_count == 0

    @pytest.mark.asyncio
    async def test_flush_when_full(self) -> None:
        send = AsyncMock()
        batcher = EditBatcher(send, flush_interval=60, max_pending=2)

        await batcher.add("s1", "title", "A")
        send.assert_not_awaited()
        await batcher.add("s2", "title", "B")

        send.assert_awaited_once_with([("s1", "title", "A"), ("s2", "title", "B")])
        assert batcher.pending_count == 0

    @pytest.mark.asyncio
    async def test_timer_flush(self) -> None:
        send = AsyncMock()
        batcher = EditBatcher(send, flush_interval=0.01, max_pending=50)

        await batcher.add("s1", "title", "A")
        await asyncio.sleep(0.05)

        send.assert_awaited_once_with([("s1", "title", "A")])

    @pytest.mark.asyncio
    async def test_new_edit_restarts_timer(self) -> None:
        send = AsyncMock()
        batcher = EditBatcher(send, flush_interval=0.2, max_pending=50)

        await batcher.add("s1", "title", "A")
        await asyncio.sleep(0.1)
        await batcher.add("s1", "title", "B")
        await asyncio.sleep(0.15)
        send.assert_not_awaited()

        await asyncio.sleep(0.2)
        send.assert_awaited_once_with([("s1", "title", "B")])

    @pytest.mark.asyncio
    async def test_empty_flush_sends_nothing(self) -> None:
        send = AsyncMock()
        batcher = EditBatcher(send, flush_interval=60, max_pending=50)
        assert await batcher.close() == 0
        send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_flush_requeues(self) -> None:
        send = AsyncMock(side_effect=[ConnectionError("offline"), None])
        batcher = EditBatcher(send, flush_interval=60, max_pending=50)
        await batcher.add("s1", "title", "A")

        with pytest.raises(ConnectionError):
            await batcher.flush()
        assert batcher.pending() == [("s1", "title", "A")]

        assert await batcher.flush() == 1
        assert send.await_count == 2

    @pytest.mark.asyncio
    async def test_failed_timer_flush_is_retried(self) -> None:
        send = AsyncMock(side_effect=[ConnectionError("offline"), None])
        batcher = EditBatcher(send, flush_interval=0.05, max_pending=50)

        await batcher.add("s1", "title", "A")
        await asyncio.sleep(0.4)

        assert send.await_count == 2
        send.assert_awaited_with([("s1", "title", "A")])
        assert batcher.pending_count == 0

    @pytest.mark.asyncio
    async def test_requeue_keeps_newer_value(self) -> None:
        failures = [ConnectionError("offline")]
        sent = []
        batcher: EditBatcher

        async def send(edits):
            if failures:
                await batcher.add("s1", "title", "newer")
                raise failures.pop()
            sent.append(edits)

        batcher = EditBatcher(send, flush_interval=60, max_pending=50)
        await batcher.add("s1", "title", "older")

        with pytest.raises(ConnectionError):
            await batcher.flush()
        assert batcher.pending() == [("s1", "title", "newer")]

        await batcher.close()
        assert sent == [[("s1", "title", "newer")]]

    @pytest.mark.asyncio
    async def test_defaults_from_settings(self) -> None:
        batcher = EditBatcher(AsyncMock())
        assert batcher.flush_interval == 1.5
        assert batcher.max_pending == 50
