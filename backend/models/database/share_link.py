"""
Share link model - view-only links handed out to recipients
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from database import Base


class ShareLinkDB(Base):
    """Share link metadata and its optional frozen slide snapshot"""

    __tablename__ = "share_links"

    id = Column(String(64), primary_key=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    disabled = Column(Boolean, nullable=False, default=False)
    slide_ids = Column(JSON, nullable=True)  # Snapshot, NULL for never-snapshotted links
    label = Column(String(200), nullable=True)

    def __repr__(self) -> str:
        return f"<ShareLinkDB(id={self.id}, disabled={self.disabled})>"
