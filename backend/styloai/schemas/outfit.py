"""
Outfit-related schemas.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field

UserStyleType = Literal["Casual", "Attractive", "Traditional", "Trend Aligned"]
Occasion = Literal["Office", "Party", "Daily", "Wedding", "Travel", "Interview", "Festival"]
WeatherCondition = Literal["sunny", "cloudy", "rainy", "snowy"]


class OutfitGenerateRequest(BaseModel):
    """The style type is validated in the handler so bad values get a 400"""
    style_type: Optional[str] = Field(None, description="Casual, Attractive, Traditional or Trend Aligned")
    occasion: Optional[Occasion] = None
    weather: Optional[WeatherCondition] = None


class OccasionOutfitRequest(BaseModel):
    occasion: Optional[str] = Field(None, description="Office, Party, Wedding, Interview, Festival or Travel")
    style_type: Optional[str] = None
