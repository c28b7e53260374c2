"""Typed async client for the DeckShare HTTP API."""

from typing import Any
from urllib.parse import quote

import aiohttp

from shared.enums import ExportFormat, LinkViewStatus, ShareLinkAction
from shared.http_client import AsyncHTTPClient
from shared.models import (
    AnalyticsSummary,
    Comment,
    DeckResponse,
    LinkViewResponse,
    ShareLink,
    SlideEdit,
    SlideOrder,
    ViewEvent,
)
from shared.utils import config, generate_link_id, setup_logging

logger = setup_logging("deck-client")


class DeckClient:
    """Call the unified API mounted under /api.

    Usage:
        async with DeckClient("http://localhost:8000") as client:
            deck = await client.get_deck()
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30) -> None:
        base = (base_url or config.get("public_base_url", "http://localhost:8000")).rstrip("/")
        self.http = AsyncHTTPClient(base_url=f"{base}/api", timeout=timeout)

    async def __aenter__(self) -> "DeckClient":
        await self.http.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.http.__aexit__(exc_type, exc_val, exc_tb)

    # Slides
    async def get_slide_edits(self) -> list[SlideEdit]:
        return [SlideEdit.model_validate(item) for item in await self.http.get("/slides")]

    async def save_edit(self, slide_id: str, field: str, value: str) -> None:
        await self.http.put("/slides", data={"slideId": slide_id, "field": field, "value": value})

    async def save_edits(self, edits: list[tuple[str, str, str]]) -> None:
        """Send a batch of (slide_id, field, value) edits in one request."""
        payload = [
            {"slideId": slide_id, "field": field, "value": value}
            for slide_id, field, value in edits
        ]
        await self.http.put("/slides", data={"edits": payload})

    async def get_slide_order(self) -> SlideOrder | None:
        data = await self.http.get("/slide-order")
        return SlideOrder.model_validate(data) if data else None

    async def save_slide_order(self, slide_ids: list[str], graveyard_index: int = -1) -> None:
        await self.http.put(
            "/slide-order", data={"slideIds": slide_ids, "graveyardIndex": graveyard_index}
        )

    async def get_deck(self) -> DeckResponse:
        return DeckResponse.model_validate(await self.http.get("/deck"))

    async def get_active_deck(self) -> DeckResponse:
        return DeckResponse.model_validate(await self.http.get("/deck/active"))

    # Share links
    async def list_share_links(self) -> list[ShareLink]:
        return [ShareLink.model_validate(item) for item in await self.http.get("/share")]

    async def get_share_link(self, link_id: str) -> ShareLink:
        return ShareLink.model_validate(await self.http.get("/share", params={"id": link_id}))

    async def create_share_link(
        self, link_id: str | None = None, label: str | None = None, snapshot: bool = True
    ) -> ShareLink:
        """Create a link, generating a short random id when none is given."""
        link_id = link_id or generate_link_id(config.get_setting("share.link_id_length", 8))
        data = await self.http.post(
            "/share", data={"id": link_id, "label": label, "snapshot": snapshot}
        )
        return ShareLink.model_validate(data)

    async def update_share_link(
        self, link_id: str, action: ShareLinkAction, label: str | None = None
    ) -> ShareLink:
        payload: dict[str, Any] = {"id": link_id, "action": ShareLinkAction(action).value}
        if label is not None:
            payload["label"] = label
        return ShareLink.model_validate(await self.http.patch("/share", data=payload))

    async def view_link(self, link_id: str) -> LinkViewResponse:
        """Resolve a link as a viewer; unavailable links do not raise."""
        try:
            data = await self.http.get(f"/view/{quote(link_id, safe='')}")
        except aiohttp.ClientResponseError as e:
            if e.status != 404:
                raise
            return LinkViewResponse(link_id=link_id, status=LinkViewStatus.UNAVAILABLE)
        return LinkViewResponse.model_validate(data)

    # Comments
    async def get_comments(self, slide_id: str | None = None) -> list[Comment]:
        params = {"slideId": slide_id} if slide_id else None
        return [Comment.model_validate(item) for item in await self.http.get("/comments", params=params)]

    async def add_comment(self, slide_id: str, text: str, author: str | None = None) -> Comment:
        data = await self.http.post(
            "/comments", data={"slideId": slide_id, "text": text, "author": author}
        )
        return Comment.model_validate(data)

    async def clear_comments(self) -> None:
        await self.http.delete("/comments")

    async def get_comment_counts(self) -> dict[str, int]:
        return await self.http.get("/comments/counts")

    # Analytics
    async def get_view_events(self, link_id: str | None = None) -> list[ViewEvent]:
        params = {"linkId": link_id} if link_id else None
        return [ViewEvent.model_validate(item) for item in await self.http.get("/analytics", params=params)]

    async def track_view(self, link_id: str, email: str, slide_id: str, duration: float) -> None:
        await self.http.post(
            "/analytics/track",
            data={"linkId": link_id, "email": email, "slideId": slide_id, "duration": duration},
        )

    async def get_analytics_summary(self, link_id: str | None = None) -> AnalyticsSummary:
        params = {"linkId": link_id} if link_id else None
        return AnalyticsSummary.model_validate(await self.http.get("/analytics/summary", params=params))

    async def export_analytics(self, export_format: ExportFormat = ExportFormat.JSON) -> str:
        return await self.http.get_text(
            "/analytics/export", params={"format": ExportFormat(export_format).value}
        )
