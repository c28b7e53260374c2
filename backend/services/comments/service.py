"""Comment log operations on top of the deck store."""

import uuid
from collections import Counter

from fastapi import Depends

from services.persistence import DeckStore, get_store
from shared.models import Comment
from shared.utils import setup_logging, utc_now

logger = setup_logging("comment-service")

DEFAULT_AUTHOR = "Anonymous"


class CommentService:
    """Append-only comment log; clearing everything is the only removal."""

    def __init__(self, store: DeckStore):
        self.store = store

    def list_comments(self, slide_id: str | None = None) -> list[Comment]:
        return self.store.get_comments(slide_id)

    def add_comment(self, slide_id: str, text: str, author: str | None = None) -> Comment:
        """Store a comment; a blank author is recorded as "Anonymous"."""
        comment = Comment(
            id=uuid.uuid4().hex,
            slide_id=slide_id,
            author=(author or "").strip() or DEFAULT_AUTHOR,
            text=text,
            created_at=utc_now(),
        )
        stored = self.store.add_comment(comment)
        logger.info(f"Comment {stored.id} added to slide {slide_id}")
        return stored

    def clear(self) -> int:
        removed = self.store.delete_all_comments()
        logger.info(f"Cleared {removed} comments")
        return removed

    def counts(self) -> dict[str, int]:
        """Number of comments per slide id."""
        return dict(Counter(comment.slide_id for comment in self.store.get_comments()))


def get_comment_service(store: DeckStore = Depends(get_store)) -> CommentService:
    return CommentService(store)
