"""
Wardrobe-related schemas.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class WardrobeItem(BaseModel):
    """Schema for wardrobe item response"""
    id: int
    user_id: int
    category: str = Field(..., description="Tops, Bottoms, Dresses, Footwear or Accessories")
    color: str = Field("", description="Color name or hex code")
    style_tags: List[str] = Field(default_factory=list, description="Free-form style tags, e.g. casual, formal")
    image_url: str = Field(..., description="Cloudinary or local upload URL")
    cloudinary_public_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WardrobeItemCreated(BaseModel):
    message: str
    item: WardrobeItem


class WardrobeList(BaseModel):
    items: List[WardrobeItem]
    count: int
