"""
Daily outfit and weekly planner schemas.
"""
import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Mood = Literal["energetic", "relaxed", "professional", "casual", "festive"]


class CalendarEventIn(BaseModel):
    title: Optional[str] = None
    time: Optional[str] = None
    type: Optional[str] = Field(None, description="Event type, e.g. office, party, travel")


class DailyOutfitRequest(BaseModel):
    user_mood: Optional[Mood] = None
    city: Optional[str] = None
    calendar_events: List[CalendarEventIn] = Field(default_factory=list)
    regenerate: bool = False


class MarkWornRequest(BaseModel):
    daily_outfit_id: int
    rating: Optional[int] = Field(None, ge=1, le=5)
    notes: Optional[str] = None


class WeeklyPlanRequest(BaseModel):
    week_start_date: Optional[dt.date] = None
    city: Optional[str] = None
    regenerate: bool = False


class ConfirmOutfitRequest(BaseModel):
    planner_id: Optional[int] = None
    date: Optional[dt.date] = None
    outfit_id: Optional[int] = None
