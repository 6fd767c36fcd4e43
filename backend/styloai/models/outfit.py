"""
Generated outfit model.
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, JSON, String, Text

from .base import Base, TimestampMixin


class Outfit(TimestampMixin, Base):
    """A generated bundle of wardrobe items"""
    __tablename__ = "outfits"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # [{"wardrobe_id", "category", "image_url"}]
    items = Column(JSON, default=list, nullable=False)
    style_type = Column(String(32), nullable=False)
    occasion = Column(String(32), nullable=True)
    weather = Column(String(32), nullable=True)
    shoes = Column(JSON, nullable=True)  # {"wardrobe_id", "image_url"}
    accessories = Column(JSON, default=list, nullable=False)
    hairstyle_suggestion = Column(Text, nullable=True)
    is_saved = Column(Boolean, default=False, nullable=False)

    def item_ids(self):
        """Wardrobe ids of every piece in the outfit"""
        ids = [i.get("wardrobe_id") for i in (self.items or [])]
        if self.shoes:
            ids.append(self.shoes.get("wardrobe_id"))
        ids.extend(a.get("wardrobe_id") for a in (self.accessories or []))
        return [i for i in ids if i is not None]

    def signature(self) -> frozenset:
        """Identity of the outfit's main garments, used to spot repeats"""
        return frozenset(i.get("wardrobe_id") for i in (self.items or []))
