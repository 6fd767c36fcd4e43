"""
Daily outfit model (one suggestion per user per day).
"""
from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class DailyOutfit(TimestampMixin, Base):
    __tablename__ = "daily_outfits"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_outfit_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    outfit_id = Column(Integer, ForeignKey("outfits.id", ondelete="SET NULL"), nullable=True)
    weather = Column(JSON, nullable=True)  # {"temperature", "condition", "humidity"}
    calendar_events = Column(JSON, default=list, nullable=False)  # [{"title", "time", "type"}]
    user_mood = Column(String(16), nullable=True)
    is_worn = Column(Boolean, default=False, nullable=False)
    worn_at = Column(DateTime, nullable=True)
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    outfit = relationship("Outfit")
