"""Base class for deck persistence backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from shared.models import Comment, ShareLink, SlideEdit, SlideOrder, ViewEvent

SHARE_LINK_UPDATABLE_FIELDS = frozenset({"disabled", "slide_ids", "label"})


class StoreError(Exception):
    """Raised when the persistence backend cannot complete an operation."""


class DeckStore(ABC):
    """Durable storage for edits, ordering, share links, comments and view events.

    Implementations must serialize read-modify-write of each record type.
    Reconciliation never talks to a store directly; it only receives the
    records a store returns.
    """

    # Slide edits
    @abstractmethod
    def get_slide_edits(self) -> list[SlideEdit]:
        """Return the current edit set, one entry per (slide_id, field)."""

    @abstractmethod
    def save_slide_edit(self, slide_id: str, field: str, value: str) -> SlideEdit:
        """Upsert one edit; the latest write for a (slide_id, field) wins."""

    def save_slide_edits(self, edits: Iterable[tuple[str, str, str]]) -> int:
        """Apply a batch of (slide_id, field, value) edits in order."""
        count = 0
        for slide_id, field, value in edits:
            self.save_slide_edit(slide_id, field, value)
            count += 1
        return count

    # Slide order
    @abstractmethod
    def get_slide_order(self) -> SlideOrder | None:
        """Return the persisted order record, or None if never saved."""

    @abstractmethod
    def save_slide_order(self, slide_ids: list[str], graveyard_index: int) -> SlideOrder:
        """Replace the order record."""

    # Share links
    @abstractmethod
    def get_share_link(self, link_id: str) -> ShareLink | None:
        """Return a link by id."""

    @abstractmethod
    def get_all_share_links(self) -> list[ShareLink]:
        """Return every link, newest first."""

    @abstractmethod
    def create_share_link(self, link: ShareLink) -> ShareLink:
        """Insert a link; an existing id is left untouched and returned."""

    @abstractmethod
    def update_share_link(self, link_id: str, updates: dict[str, Any]) -> ShareLink | None:
        """Apply partial updates and bump updated_at. Returns None for unknown ids."""

    # Comments
    @abstractmethod
    def get_comments(self, slide_id: str | None = None) -> list[Comment]:
        """Return comments oldest first, optionally for one slide."""

    @abstractmethod
    def add_comment(self, comment: Comment) -> Comment:
        """Append a comment."""

    @abstractmethod
    def delete_all_comments(self) -> int:
        """Remove every comment and return how many were removed."""

    # View events
    @abstractmethod
    def track_view(self, event: ViewEvent) -> ViewEvent:
        """Append a view event."""

    @abstractmethod
    def get_view_events(self, link_id: str | None = None) -> list[ViewEvent]:
        """Return view events oldest first, optionally for one link."""

    @staticmethod
    def _check_link_updates(updates: dict[str, Any]) -> None:
        unknown = set(updates) - SHARE_LINK_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported share link fields: {', '.join(sorted(unknown))}")
