"""Debounced, coalescing batcher for inline slide edits."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from shared.utils import config, setup_logging

logger = setup_logging("edit-batcher")

EditKey = tuple[str, str]
SendBatch = Callable[[list[tuple[str, str, str]]], Awaitable[object]]


class EditBatcher:
    """Collect edits keyed by (slide_id, field) and send them as one batch.

    A new value for a pending key replaces the old one. The batch is sent
    when no edit arrived for `flush_interval` seconds, when `max_pending`
    distinct keys are waiting, or on an explicit flush()/close().
    """

    def __init__(
        self,
        send: SendBatch,
        flush_interval: float | None = None,
        max_pending: int | None = None,
    ) -> None:
        self._send = send
        self.flush_interval = (
            flush_interval
            if flush_interval is not None
            else float(config.get_setting("editor.flush_interval_seconds", 1.5))
        )
        self.max_pending = (
            max_pending
            if max_pending is not None
            else int(config.get_setting("editor.max_pending_edits", 50))
        )
        self._pending: dict[EditKey, str] = {}
        self._lock = asyncio.Lock()
        self._flush_lock = asyncio.Lock()
        self._timer: asyncio.Task | None = None

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def pending(self) -> list[tuple[str, str, str]]:
        return [(slide_id, field, value) for (slide_id, field), value in self._pending.items()]

    async def add(self, slide_id: str, field: str, value: str) -> None:
        async with self._lock:
            self._pending[(slide_id, field)] = value
            full = len(self._pending) >= self.max_pending
            if not full:
                self._restart_timer()
        if full:
            await self.flush()

    def _restart_timer(self) -> None:
        if self._timer and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.create_task(self._flush_later())

    async def _flush_later(self) -> None:
        await asyncio.sleep(self.flush_interval)
        # Clear our own handle so flush() does not cancel the running task
        self._timer = None
        try:
            await self.flush()
        except Exception as e:
            logger.error(f"Timed flush of slide edits failed, retrying in {self.flush_interval}s: {e!s}")
            async with self._lock:
                if self._pending and self._timer is None:
                    self._restart_timer()

    async def flush(self) -> int:
        """Send every pending edit; failed edits are re-queued and the error re-raised.

        Returns:
            Number of edits sent
        """
        async with self._flush_lock:
            async with self._lock:
                if self._timer and not self._timer.done():
                    self._timer.cancel()
                self._timer = None
                batch = self._pending
                self._pending = {}

            if not batch:
                return 0

            edits = [(slide_id, field, value) for (slide_id, field), value in batch.items()]
            try:
                await self._send(edits)
            except Exception:
                async with self._lock:
                    # Keep values edited again while the batch was in flight
                    for key, value in batch.items():
                        self._pending.setdefault(key, value)
                logger.warning(f"Failed to send {len(edits)} slide edits, re-queued")
                raise

            logger.debug(f"Flushed {len(edits)} slide edits")
            return len(edits)

    async def close(self) -> int:
        """Flush remaining edits and stop the timer."""
        return await self.flush()
