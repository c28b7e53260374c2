"""
Slide order model - single-row custom ordering with graveyard cut
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String

from database import Base

DEFAULT_ORDER_ID = "default"


class SlideOrderDB(Base):
    """Persisted slide id sequence; slides at graveyard_index and beyond are archived"""

    __tablename__ = "slide_order"

    id = Column(String(32), primary_key=True, default=DEFAULT_ORDER_ID)
    slide_ids = Column(JSON, nullable=False)
    graveyard_index = Column(Integer, nullable=False, default=-1)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
