"""Tests for DeckService: reconciled views and share-link lifecycle."""

import pytest

from services.deck.catalog import get_catalog
from services.deck.service import DeckService, ShareLinkNotFoundError
from shared.enums import LinkViewStatus, SlideLayout
from shared.models import Slide
from shared.utils import setup_logging

setup_logging("test-deck-service", log_level="CRITICAL")


def make_catalog(*ids: str) -> list[Slide]:
    return [Slide(id=slide_id, layout=SlideLayout.TEXT, title=slide_id.upper()) for slide_id in ids]


@pytest.fixture
def service(store) -> DeckService:
    return DeckService(store, catalog=make_catalog("x", "y", "z"))


class TestCatalog:
    """The built-in catalog."""

    def test_ids_unique(self) -> None:
        ids = [slide.id for slide in get_catalog()]
        assert len(ids) == len(set(ids))

    def test_default_service_uses_catalog(self, store) -> None:
        service = DeckService(store)
        assert [s.id for s in service.editor_deck().slides] == [s.id for s in get_catalog()]


class TestDeckViews:
    """Editor and active views."""

    def test_editor_deck_includes_graveyard(self, service: DeckService) -> None:
        service.save_order(["z", "x", "y"], 1)
        deck = service.editor_deck()

        assert [s.id for s in deck.slides] == ["z", "x", "y"]
        assert deck.graveyard_index == 1
        assert [s.id for s in service.active_deck()] == ["z"]
        assert service.active_slide_ids() == ["z"]

    def test_edits_flow_into_views(self, service: DeckService) -> None:
        service.save_edit("y", "title", "Why")
        assert service.merged_slides()[1].title == "Why"
        assert service.active_deck()[1].title == "Why"

    def test_save_edits_batch(self, service: DeckService) -> None:
        assert service.save_edits([("x", "title", "1"), ("x", "title", "2")]) == 2
        assert service.merged_slides()[0].title == "2"

    @pytest.mark.parametrize("graveyard_index", [-2, 4])
    def test_save_order_rejects_out_of_range_cut(self, service: DeckService, graveyard_index: int) -> None:
        with pytest.raises(ValueError):
            service.save_order(["x", "y", "z"], graveyard_index)

    def test_save_order_accepts_cut_at_end(self, service: DeckService) -> None:
        service.save_order(["x", "y", "z"], 3)
        assert [s.id for s in service.active_deck()] == ["x", "y", "z"]


class TestShareLinks:
    """Snapshots, refresh and availability."""

    def test_create_link_snapshots_active_ids(self, service: DeckService) -> None:
        service.save_order(["y", "x", "z"], 2)
        link = service.create_link("abc", label="Board")

        assert link.slide_ids == ["y", "x"]
        assert link.label == "Board"
        assert link.created_at is not None

    def test_create_link_without_snapshot(self, service: DeckService) -> None:
        link = service.create_link("live", snapshot=False)
        assert link.slide_ids is None

    def test_create_existing_link_returns_existing(self, service: DeckService) -> None:
        service.create_link("abc")
        service.save_order(["z"], 1)
        assert service.create_link("abc").slide_ids == ["x", "y", "z"]

    def test_snapshot_stable_until_refresh(self, service: DeckService) -> None:
        service.save_order(["x", "y", "z"], 2)
        service.create_link("abc")
        service.save_order(["y", "z", "x"], 2)

        view = service.view_link("abc")
        assert [s.id for s in view.slides] == ["x", "y"]

        refreshed = service.refresh_link("abc")
        assert refreshed.slide_ids == ["y", "z"]
        assert [s.id for s in service.view_link("abc").slides] == ["y", "z"]

    def test_refresh_cuts_after_placing_unordered_slides(self, service: DeckService) -> None:
        service.create_link("abc")
        service.save_order(["x", "z"], 1)

        refreshed = service.refresh_link("abc")
        assert [s.id for s in service.editor_deck().slides] == ["x", "y", "z"]
        assert refreshed.slide_ids == ["x"]

    def test_unsnapshotted_link_tracks_live_order(self, service: DeckService) -> None:
        service.create_link("live", snapshot=False)
        service.save_order(["z", "y", "x"], 2)
        assert [s.id for s in service.view_link("live").slides] == ["z", "y"]

    def test_disable_and_enable(self, service: DeckService) -> None:
        service.create_link("abc")

        service.set_link_disabled("abc", True)
        view = service.view_link("abc")
        assert view.status is LinkViewStatus.UNAVAILABLE
        assert view.slides == []

        service.set_link_disabled("abc", False)
        assert service.view_link("abc").available

    def test_rename(self, service: DeckService) -> None:
        service.create_link("abc")
        assert service.rename_link("abc", "Renamed").label == "Renamed"

    def test_unknown_link_operations_raise(self, service: DeckService) -> None:
        with pytest.raises(ShareLinkNotFoundError):
            service.get_link("nope")
        with pytest.raises(ShareLinkNotFoundError):
            service.set_link_disabled("nope", True)
        with pytest.raises(ShareLinkNotFoundError):
            service.refresh_link("nope")

    def test_unknown_link_view_unavailable(self, service: DeckService) -> None:
        assert service.view_link("nope").status is LinkViewStatus.UNAVAILABLE
