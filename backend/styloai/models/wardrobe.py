"""
Wardrobe item model.
"""
from sqlalchemy import Column, ForeignKey, Integer, JSON, String, Text

from .base import Base, TimestampMixin


class WardrobeItem(TimestampMixin, Base):
    """Wardrobe item model"""
    __tablename__ = "wardrobe_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(32), nullable=False, index=True)
    color = Column(String(64), default="", nullable=False)
    style_tags = Column(JSON, default=list, nullable=False)
    image_url = Column(Text, nullable=False)  # Cloudinary or local upload URL
    cloudinary_public_id = Column(String(255), nullable=True)  # For deletion

    def to_dict(self):
        """Convert to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category": self.category,
            "color": self.color,
            "style_tags": self.style_tags or [],
            "image_url": self.image_url,
            "cloudinary_public_id": self.cloudinary_public_id,
            "created_at": self.created_at,
        }
