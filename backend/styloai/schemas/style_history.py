"""
Style history and wardrobe gap schemas.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Photo(BaseModel):
    image_url: str
    cloudinary_public_id: Optional[str] = None


class TrackWornRequest(BaseModel):
    outfit_id: Optional[int] = None
    worn_date: Optional[datetime] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    feedback: Optional[str] = None
    photos: List[Photo] = Field(default_factory=list)


class ResolveGapRequest(BaseModel):
    gap_id: Optional[int] = None
