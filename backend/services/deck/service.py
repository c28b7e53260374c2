"""Deck service: the single entry point that combines catalog, edits and order."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fastapi import Depends

from services.persistence import DeckStore, get_store
from shared.models import ShareLink, Slide, SlideEdit, SlideOrder
from shared.utils import setup_logging, utc_now

from .catalog import get_catalog
from .reconciliation import (
    LinkView,
    OrderedDeck,
    active_slide_ids,
    merge_edits,
    reconcile_order,
    resolve_link_view,
)

logger = setup_logging("deck-service")


class ShareLinkNotFoundError(Exception):
    """Raised when a requested share link does not exist."""


class DeckService:
    """Reconcile persisted deck state for the editor, link manager and viewer."""

    def __init__(self, store: DeckStore, catalog: Sequence[Slide] | None = None) -> None:
        self.store = store
        self.catalog = tuple(catalog) if catalog is not None else get_catalog()

    # Reconciled views
    def merged_slides(self) -> list[Slide]:
        """Catalog order with current edits applied."""
        return merge_edits(self.catalog, self.store.get_slide_edits())

    def editor_deck(self) -> OrderedDeck:
        """Full ordered deck including the graveyard."""
        return reconcile_order(self.merged_slides(), self.store.get_slide_order())

    def active_deck(self) -> list[Slide]:
        return self.editor_deck().active

    def active_slide_ids(self) -> list[str]:
        return active_slide_ids(self.catalog, self.store.get_slide_edits(), self.store.get_slide_order())

    # Edits and order
    def save_edit(self, slide_id: str, field: str, value: str) -> SlideEdit:
        edit = self.store.save_slide_edit(slide_id, field, value)
        logger.debug(f"Saved edit {slide_id}:{field}")
        return edit

    def save_edits(self, edits: Iterable[tuple[str, str, str]]) -> int:
        count = self.store.save_slide_edits(list(edits))
        logger.info(f"Saved batch of {count} slide edits")
        return count

    def save_order(self, slide_ids: list[str], graveyard_index: int) -> SlideOrder:
        if graveyard_index < -1 or graveyard_index > len(slide_ids):
            raise ValueError(
                f"graveyardIndex must be between -1 and {len(slide_ids)}, got {graveyard_index}"
            )
        order = self.store.save_slide_order(slide_ids, graveyard_index)
        logger.info(f"Saved slide order ({len(slide_ids)} slides, graveyard at {graveyard_index})")
        return order

    # Share links
    def list_links(self) -> list[ShareLink]:
        return self.store.get_all_share_links()

    def get_link(self, link_id: str) -> ShareLink:
        link = self.store.get_share_link(link_id)
        if link is None:
            raise ShareLinkNotFoundError(f"Share link '{link_id}' not found")
        return link

    def create_link(self, link_id: str, label: str | None = None, snapshot: bool = True) -> ShareLink:
        """Create a link, freezing the current active slide ids unless `snapshot` is False.

        Creating an id that already exists returns the existing link unchanged.
        """
        now = utc_now()
        link = ShareLink(
            id=link_id,
            created_at=now,
            updated_at=now,
            label=label,
            slide_ids=self.active_slide_ids() if snapshot else None,
        )
        created = self.store.create_share_link(link)
        logger.info(f"Share link {created.id} ready ({len(created.slide_ids or [])} slides snapshotted)")
        return created

    def _update_link(self, link_id: str, **updates) -> ShareLink:
        link = self.store.update_share_link(link_id, updates)
        if link is None:
            raise ShareLinkNotFoundError(f"Share link '{link_id}' not found")
        return link

    def set_link_disabled(self, link_id: str, disabled: bool) -> ShareLink:
        link = self._update_link(link_id, disabled=disabled)
        logger.info(f"Share link {link_id} {'disabled' if disabled else 'enabled'}")
        return link

    def rename_link(self, link_id: str, label: str | None) -> ShareLink:
        return self._update_link(link_id, label=label)

    def refresh_link(self, link_id: str) -> ShareLink:
        """Overwrite the link's snapshot with the current active slide ids."""
        # Unknown ids fail before reconciliation runs
        self.get_link(link_id)
        slide_ids = self.active_slide_ids()
        link = self._update_link(link_id, slide_ids=slide_ids)
        logger.info(f"Refreshed snapshot of share link {link_id} ({len(slide_ids)} slides)")
        return link

    def view_link(self, link_id: str) -> LinkView:
        """Resolve what an anonymous viewer of the link sees."""
        return resolve_link_view(
            link_id,
            self.store.get_share_link(link_id),
            self.catalog,
            self.store.get_slide_edits,
            self.store.get_slide_order,
        )


def get_deck_service(store: DeckStore = Depends(get_store)) -> DeckService:
    """FastAPI dependency building a deck service over the configured store."""
    return DeckService(store)
