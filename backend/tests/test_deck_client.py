"""Tests for the typed API client."""

from unittest.mock import AsyncMock

import aiohttp
import pytest

from client.deck_client import DeckClient
from shared.enums import ExportFormat, LinkViewStatus, ShareLinkAction
from shared.http_client import AsyncHTTPClient
from shared.utils import config, setup_logging

setup_logging("test-deck-client", log_level="CRITICAL")

LINK = {
    "id": "abc12345",
    "createdAt": "2025-01-01T00:00:00+00:00",
    "updatedAt": None,
    "disabled": False,
    "slideIds": ["slide-01"],
    "label": None,
}


@pytest.fixture
def deck_client() -> DeckClient:
    client = DeckClient("http://deck.local/")
    client.http = AsyncMock(spec=AsyncHTTPClient)
    return client


class TestDeckClient:
    """Request shapes and response parsing."""

    def test_base_url_points_at_api(self) -> None:
        assert DeckClient("http://deck.local/").http.base_url == "http://deck.local/api"

    @pytest.mark.asyncio
    async def test_save_edits_sends_batch(self, deck_client: DeckClient) -> None:
        await deck_client.save_edits([("s1", "title", "A"), ("s1", "bullets.0", "B")])

        deck_client.http.put.assert_awaited_once_with(
            "/slides",
            data={
                "edits": [
                    {"slideId": "s1", "field": "title", "value": "A"},
                    {"slideId": "s1", "field": "bullets.0", "value": "B"},
                ]
            },
        )

    @pytest.mark.asyncio
    async def test_get_slide_order_none(self, deck_client: DeckClient) -> None:
        deck_client.http.get.return_value = None
        assert await deck_client.get_slide_order() is None

    @pytest.mark.asyncio
    async def test_get_slide_order(self, deck_client: DeckClient) -> None:
        deck_client.http.get.return_value = {"slideIds": ["b", "a"], "graveyardIndex": 1}
        order = await deck_client.get_slide_order()
        assert order.slide_ids == ["b", "a"]
        assert order.graveyard_index == 1

    @pytest.mark.asyncio
    async def test_create_share_link_generates_id(self, deck_client: DeckClient) -> None:
        deck_client.http.post.return_value = LINK

        link = await deck_client.create_share_link(label="Board")

        assert link.id == "abc12345"
        sent = deck_client.http.post.await_args.kwargs["data"]
        assert len(sent["id"]) == config.get_setting("share.link_id_length", 8)
        assert sent["label"] == "Board"
        assert sent["snapshot"] is True

    @pytest.mark.asyncio
    async def test_update_share_link(self, deck_client: DeckClient) -> None:
        deck_client.http.patch.return_value = {**LINK, "disabled": True}

        link = await deck_client.update_share_link("abc12345", ShareLinkAction.DISABLE)

        assert link.disabled is True
        deck_client.http.patch.assert_awaited_once_with(
            "/share", data={"id": "abc12345", "action": "disable"}
        )

    @pytest.mark.asyncio
    async def test_view_link_unavailable(self, deck_client: DeckClient) -> None:
        deck_client.http.get.side_effect = aiohttp.ClientResponseError(
            request_info=AsyncMock(), history=(), status=404
        )

        view = await deck_client.view_link("gone")

        assert view.status is LinkViewStatus.UNAVAILABLE
        assert view.slides == []

    @pytest.mark.asyncio
    async def test_view_link_quotes_id(self, deck_client: DeckClient) -> None:
        deck_client.http.get.return_value = {"linkId": "a/b c?", "status": "available", "slides": []}

        view = await deck_client.view_link("a/b c?")

        assert view.status is LinkViewStatus.AVAILABLE
        deck_client.http.get.assert_awaited_once_with("/view/a%2Fb%20c%3F")

    @pytest.mark.asyncio
    async def test_view_link_server_error_raises(self, deck_client: DeckClient) -> None:
        deck_client.http.get.side_effect = aiohttp.ClientResponseError(
            request_info=AsyncMock(), history=(), status=500
        )
        with pytest.raises(aiohttp.ClientResponseError):
            await deck_client.view_link("abc12345")

    @pytest.mark.asyncio
    async def test_track_view(self, deck_client: DeckClient) -> None:
        await deck_client.track_view("abc12345", "ann@x.io", "slide-01", 2.3)
        deck_client.http.post.assert_awaited_once_with(
            "/analytics/track",
            data={"linkId": "abc12345", "email": "ann@x.io", "slideId": "slide-01", "duration": 2.3},
        )

    @pytest.mark.asyncio
    async def test_export(self, deck_client: DeckClient) -> None:
        deck_client.http.get_text.return_value = "link_id,email\r\n"
        assert await deck_client.export_analytics(ExportFormat.CSV) == "link_id,email\r\n"
        deck_client.http.get_text.assert_awaited_once_with(
            "/analytics/export", params={"format": "csv"}
        )
