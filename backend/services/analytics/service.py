"""Analytics Service - view tracking and dashboard aggregation for share links."""

import csv
import json
import math
from datetime import datetime
from pathlib import Path

from fastapi import Depends

from services.deck.service import DeckService, get_deck_service
from shared.enums import ExportFormat
from shared.models import (
    AnalyticsSummary,
    RecipientSummary,
    SlideViewSummary,
    ViewEvent,
)
from shared.utils import config, ensure_directory, setup_logging, utc_now

logger = setup_logging("analytics-service")

CSV_COLUMNS = ["link_id", "email", "slide_id", "duration", "timestamp"]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_duration(seconds: float) -> str:
    """Render a duration as `42s` below a minute, else `3m 5s`."""
    if seconds < 60:
        return f"{_round_half_up(seconds)}s"
    minutes = math.floor(seconds / 60)
    secs = _round_half_up(seconds % 60)
    return f"{minutes}m {secs}s"


def summarize_recipients(events: list[ViewEvent]) -> list[RecipientSummary]:
    """Aggregate view events per recipient email, most recently seen first."""
    recipients: dict[str, RecipientSummary] = {}
    for event in events:
        summary = recipients.get(event.email)
        if summary is None:
            summary = RecipientSummary(
                email=event.email, total_time=0.0, last_seen=event.timestamp
            )
            recipients[event.email] = summary
        summary.total_time += event.duration
        summary.slide_views[event.slide_id] = (
            summary.slide_views.get(event.slide_id, 0.0) + event.duration
        )
        if event.timestamp > summary.last_seen:
            summary.last_seen = event.timestamp
        if event.link_id not in summary.link_ids:
            summary.link_ids.append(event.link_id)
    return sorted(recipients.values(), key=lambda r: r.last_seen, reverse=True)


class AnalyticsService:
    """Record view events and build the dashboard summary."""

    def __init__(self, deck: DeckService, export_dir: str | Path | None = None):
        self.deck = deck
        self.store = deck.store
        self.export_dir = Path(export_dir or config.get("analytics_export_dir", "./analytics_exports"))

    def track_view(
        self, link_id: str, email: str, slide_id: str, duration: float | None = None
    ) -> ViewEvent:
        event = ViewEvent(
            link_id=link_id,
            email=email.strip(),
            slide_id=slide_id,
            duration=duration or 0.0,
            timestamp=utc_now(),
        )
        stored = self.store.track_view(event)
        logger.debug(f"Tracked {stored.duration}s on {slide_id} via link {link_id}")
        return stored

    def get_events(self, link_id: str | None = None) -> list[ViewEvent]:
        return self.store.get_view_events(link_id)

    def get_summary(self, link_id: str | None = None) -> AnalyticsSummary:
        """Dashboard aggregation.

        Per-slide totals follow the live active deck order; views of slides
        that are no longer active still count toward recipient totals.

        Args:
            link_id: Restrict the summary to events recorded through one link

        Returns:
            Recipient, slide and link totals
        """
        events = self.get_events(link_id)
        links = self.deck.list_links()
        recipients = summarize_recipients(events)

        slide_time: dict[str, float] = {}
        slide_viewers: dict[str, set[str]] = {}
        for event in events:
            slide_time[event.slide_id] = slide_time.get(event.slide_id, 0.0) + event.duration
            slide_viewers.setdefault(event.slide_id, set()).add(event.email)

        slides = [
            SlideViewSummary(
                slide_id=slide.id,
                title=slide.title,
                total_time=round(slide_time.get(slide.id, 0.0), 1),
                viewers=len(slide_viewers.get(slide.id, ())),
            )
            for slide in self.deck.active_deck()
        ]

        total = sum(r.total_time for r in recipients)
        return AnalyticsSummary(
            total_view_time=round(total, 1),
            total_view_time_display=format_duration(total) if total > 0 else "-",
            recipient_count=len(recipients),
            active_link_count=sum(1 for link in links if not link.disabled),
            total_link_count=len(links),
            recipients=recipients,
            slides=slides,
        )

    def export_events(self, export_format: ExportFormat, link_id: str | None = None) -> Path:
        """Write view events (and, for JSON, the summary) to the export directory."""
        events = self.get_events(link_id)
        ensure_directory(self.export_dir)
        export_filename = f"view_events_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.{export_format.value}"
        export_path = self.export_dir / export_filename

        if export_format is ExportFormat.JSON:
            self._export_json(export_path, events, self.get_summary(link_id))
        else:
            self._export_csv(export_path, events)

        logger.info(f"Created analytics export: {export_filename} ({len(events)} events)")
        return export_path

    @staticmethod
    def _export_json(export_path: Path, events: list[ViewEvent], summary: AnalyticsSummary) -> None:
        data = {
            "export_info": {
                "created_at": utc_now().isoformat(),
                "event_count": len(events),
            },
            "summary": summary.model_dump(mode="json", by_alias=True),
            "events": [event.model_dump(mode="json", by_alias=True) for event in events],
        }
        with open(export_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)

    @staticmethod
    def _export_csv(export_path: Path, events: list[ViewEvent]) -> None:
        with open(export_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_COLUMNS)
            for event in events:
                writer.writerow([
                    event.link_id,
                    event.email,
                    event.slide_id,
                    event.duration,
                    event.timestamp.isoformat(),
                ])


def get_analytics_service(deck: DeckService = Depends(get_deck_service)) -> AnalyticsService:
    return AnalyticsService(deck)
