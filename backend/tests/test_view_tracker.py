"""Tests for viewer-side slide timing."""

from unittest.mock import AsyncMock

import pytest

from client.view_tracker import ViewTracker, is_valid_email, round_duration
from shared.utils import setup_logging

setup_logging("test-view-tracker", log_level="CRITICAL")


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_tracker(track, clock: FakeClock, **kwargs) -> ViewTracker:
    tracker = ViewTracker("abc12345", track, min_seconds=0.5, clock=clock, **kwargs)
    assert tracker.set_email("viewer@example.com")
    return tracker


class TestEmailGate:
    """Viewer email validation."""

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@example.org"])
    def test_valid(self, email: str) -> None:
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["", None, "nobody", "no-at.example.com", "user@localhost"])
    def test_invalid(self, email) -> None:
        assert not is_valid_email(email)

    def test_set_email_rejects_invalid(self) -> None:
        tracker = ViewTracker("abc12345", AsyncMock(), min_seconds=0.5)
        assert tracker.set_email("nope") is False
        assert tracker.email is None


class TestViewTracker:
    """Timing and fire-and-forget delivery."""

    def test_round_duration(self) -> None:
        assert round_duration(2.34) == 2.3
        assert round_duration(2.36) == 2.4
        assert round_duration(0.96) == 1.0

    @pytest.mark.asyncio
    async def test_navigation_reports_previous_slide(self, clock: FakeClock) -> None:
        track = AsyncMock()
        tracker = make_tracker(track, clock)

        tracker.show("slide-01")
        clock.advance(3.26)
        assert tracker.show("slide-02") == 3.3
        clock.advance(1.0)
        await tracker.close()

        assert track.await_args_list[0].args == ("abc12345", "viewer@example.com", "slide-01", 3.3)
        assert track.await_args_list[1].args == ("abc12345", "viewer@example.com", "slide-02", 1.0)

    @pytest.mark.asyncio
    async def test_short_views_not_reported(self, clock: FakeClock) -> None:
        track = AsyncMock()
        tracker = make_tracker(track, clock)

        tracker.show("slide-01")
        clock.advance(0.5)
        assert tracker.show("slide-02") is None
        await tracker.close()

        track.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_email_no_reports(self, clock: FakeClock) -> None:
        track = AsyncMock()
        tracker = ViewTracker("abc12345", track, min_seconds=0.5, clock=clock)

        tracker.show("slide-01")
        clock.advance(5)
        await tracker.close()

        track.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self, clock: FakeClock) -> None:
        track = AsyncMock(side_effect=ConnectionError("offline"))
        tracker = make_tracker(track, clock)

        tracker.show("slide-01")
        clock.advance(2)
        await tracker.close()

        track.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_finish_without_slide(self, clock: FakeClock) -> None:
        tracker = make_tracker(AsyncMock(), clock)
        assert tracker.finish() is None

    def test_finish_outside_event_loop_drops_report(self, clock: FakeClock) -> None:
        track = AsyncMock()
        tracker = make_tracker(track, clock)

        tracker.show("slide-01")
        clock.advance(2)

        assert tracker.show("slide-02") is None
        assert tracker.current_slide_id == "slide-02"
        track.assert_not_called()
