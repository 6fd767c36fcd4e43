"""
Style history model (outfits the user actually wore).
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class StyleHistory(TimestampMixin, Base):
    __tablename__ = "style_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    outfit_id = Column(Integer, ForeignKey("outfits.id", ondelete="SET NULL"), nullable=True)
    worn_date = Column(DateTime, nullable=False, index=True)
    occasion = Column(String(32), nullable=True)
    rating = Column(Integer, nullable=True)
    feedback = Column(Text, nullable=True)
    photos = Column(JSON, default=list, nullable=False)  # [{"image_url", "cloudinary_public_id"}]
    style_score = Column(Integer, nullable=True)  # 0-100
    improvement_suggestions = Column(JSON, default=list, nullable=False)

    outfit = relationship("Outfit")
