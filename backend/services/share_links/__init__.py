"""
Share Link Service - named, revocable view-only links to the deck.

Usage:
    from services.share_links import app as share_links_app
"""

from .app import app

__all__ = ["app"]
