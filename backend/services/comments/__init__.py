"""
Comment Service - per-slide comments left by viewers and editors.

Usage:
    from services.comments import app as comments_app
"""

from .app import app
from .service import CommentService

__all__ = ["app", "CommentService"]
