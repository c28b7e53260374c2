"""
View event model - time spent on a slide by a link recipient
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Float, Integer, String

from database import Base


class ViewEventDB(Base):
    """Append-only view-duration event"""

    __tablename__ = "view_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    link_id = Column(String(64), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    slide_id = Column(String(100), nullable=False)
    duration = Column(Float, nullable=False, default=0.0)  # seconds
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False, index=True)
