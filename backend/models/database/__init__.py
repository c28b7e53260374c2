"""
Database models package - SQLAlchemy ORM models
"""

from .comment import CommentDB
from .share_link import ShareLinkDB
from .slide_edit import SlideEditDB
from .slide_order import SlideOrderDB
from .view_event import ViewEventDB

__all__ = [
    "CommentDB",
    "ShareLinkDB",
    "SlideEditDB",
    "SlideOrderDB",
    "ViewEventDB",
]
