"""
Comment model - per-slide discussion entries
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, Text

from database import Base


class CommentDB(Base):
    """Append-only comment left on a slide"""

    __tablename__ = "comments"

    id = Column(String(36), primary_key=True)
    slide_id = Column(String(100), nullable=False, index=True)
    author = Column(String(255), nullable=False)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True)
