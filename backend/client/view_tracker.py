"""Per-slide view timing for the public share-link viewer."""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Awaitable, Callable

from shared.utils import config, setup_logging

logger = setup_logging("view-tracker")

TrackFn = Callable[[str, str, str, float], Awaitable[object]]


def is_valid_email(email: str | None) -> bool:
    """Loose gate used before a viewer may see the deck."""
    return bool(email) and "@" in email and "." in email


def round_duration(seconds: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(seconds * 10 + 0.5) / 10


class ViewTracker:
    """Time how long a viewer stays on each slide and report it.

    Reports are fire-and-forget: a failed delivery is logged and never
    interrupts the viewer.
    """

    def __init__(
        self,
        link_id: str,
        track: TrackFn,
        min_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.link_id = link_id
        self._track = track
        self.min_seconds = (
            min_seconds
            if min_seconds is not None
            else float(config.get_setting("viewer.min_tracked_seconds", 0.5))
        )
        self._clock = clock
        self.email: str | None = None
        self.current_slide_id: str | None = None
        self._started_at: float | None = None
        self._tasks: set[asyncio.Task] = set()

    def set_email(self, email: str) -> bool:
        """Accept the viewer's email; returns False when it does not look valid."""
        email = email.strip()
        if not is_valid_email(email):
            return False
        self.email = email
        return True

    def show(self, slide_id: str) -> float | None:
        """Switch to `slide_id`, reporting time spent on the previous slide."""
        duration = self.finish()
        self.current_slide_id = slide_id
        self._started_at = self._clock()
        return duration

    def finish(self) -> float | None:
        """Stop timing the current slide and report it if it passed the minimum.

        Returns:
            The reported duration, or None when nothing was reported (including
            when called outside a running event loop)
        """
        if self.current_slide_id is None or self._started_at is None:
            return None
        slide_id = self.current_slide_id
        elapsed = self._clock() - self._started_at
        self.current_slide_id = None
        self._started_at = None

        if not self.email or elapsed <= self.min_seconds:
            return None
        duration = round_duration(elapsed)
        delivery = self._deliver(self.email, slide_id, duration)
        try:
            task = asyncio.create_task(delivery)
        except RuntimeError:
            delivery.close()
            logger.warning(f"No running event loop, dropped view of {slide_id} on link {self.link_id}")
            return None
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return duration

    async def _deliver(self, email: str, slide_id: str, duration: float) -> None:
        try:
            await self._track(self.link_id, email, slide_id, duration)
        except Exception as e:
            logger.warning(f"Failed to track view of {slide_id} on link {self.link_id}: {e!s}")

    async def close(self) -> None:
        """Report the current slide and wait for outstanding deliveries."""
        self.finish()
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
