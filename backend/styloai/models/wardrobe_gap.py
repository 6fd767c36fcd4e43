"""
Wardrobe gap analysis model.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON

from .base import Base, TimestampMixin, utcnow


class WardrobeGap(TimestampMixin, Base):
    __tablename__ = "wardrobe_gaps"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # [{"category", "item_name", "description", "priority", "suggested_colors", "shopping_links"}]
    missing_items = Column(JSON, default=list, nullable=False)
    analysis_date = Column(DateTime, default=utcnow, nullable=False)
    is_resolved = Column(Boolean, default=False, nullable=False, index=True)
