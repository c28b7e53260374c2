"""
Client helpers for the DeckShare API.

- DeckClient: typed async wrapper around every API route
- EditBatcher: coalesces inline slide edits and flushes them in batches
- ViewTracker: times slide views in the public viewer and reports them
"""

from .batcher import EditBatcher
from .deck_client import DeckClient
from .view_tracker import ViewTracker, is_valid_email

__all__ = ["DeckClient", "EditBatcher", "ViewTracker", "is_valid_email"]
