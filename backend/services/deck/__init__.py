"""Deck service - slide catalog, edits, ordering and reconciliation.

This service handles:
- Merging persisted field edits into the code-defined slide catalog
- Applying the custom slide order and graveyard cut
- Resolving what a share link shows to its viewers
"""

from .reconciliation import (
    LinkView,
    OrderedDeck,
    active_projection,
    active_slide_ids,
    apply_order,
    merge_edits,
    reconcile_order,
    resolve_link_view,
)
from .service import DeckService, ShareLinkNotFoundError, get_deck_service

__all__ = [
    "DeckService",
    "LinkView",
    "OrderedDeck",
    "ShareLinkNotFoundError",
    "active_projection",
    "active_slide_ids",
    "apply_order",
    "get_deck_service",
    "merge_edits",
    "reconcile_order",
    "resolve_link_view",
]
