"""
Slide edit model - latest override per (slide, field path)
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, Text

from database import Base


class SlideEditDB(Base):
    """Field override applied on top of the slide catalog"""

    __tablename__ = "slide_edits"

    slide_id = Column(String(100), primary_key=True)
    field = Column(String(255), primary_key=True)  # e.g. "title" or "bullets.2"
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
