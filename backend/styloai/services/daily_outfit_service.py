"""
Today's outfit: one suggestion per user per day, shaped by mood, weather and calendar.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, ValidationError
from ..models import DailyOutfit, User, utcnow
from .outfit_generator import create_outfit, recently_worn_signatures, serialize_outfit
from .weather_service import get_weather_based_recommendations, get_weather_by_city

logger = logging.getLogger(__name__)


def occasion_from_events(calendar_events: Optional[List[dict]]) -> str:
    event_types = [(e.get("type") or "").lower() for e in calendar_events or []]
    if "office" in event_types or "meeting" in event_types:
        return "Office"
    if "party" in event_types or "celebration" in event_types:
        return "Party"
    if "wedding" in event_types:
        return "Wedding"
    if "travel" in event_types:
        return "Travel"
    return "Daily"


def style_for(mood: Optional[str], occasion: str) -> str:
    if mood == "professional" or occasion == "Office":
        return "Professional"
    if mood == "festive" or occasion == "Party":
        return "Attractive"
    return "Casual"


def daily_outfit_to_dict(daily: DailyOutfit, include_outfit: bool = False) -> Dict[str, Any]:
    data = {
        "id": daily.id,
        "user_id": daily.user_id,
        "date": daily.date,
        "outfit_id": daily.outfit_id,
        "weather": daily.weather,
        "calendar_events": daily.calendar_events or [],
        "user_mood": daily.user_mood,
        "is_worn": daily.is_worn,
        "worn_at": daily.worn_at,
        "rating": daily.rating,
        "notes": daily.notes,
        "created_at": daily.created_at,
    }
    if include_outfit:
        data["outfit"] = serialize_outfit(daily.outfit)
    return data


def _todays_record(db: Session, user_id: int) -> Optional[DailyOutfit]:
    return (
        db.query(DailyOutfit)
        .filter(DailyOutfit.user_id == user_id, DailyOutfit.date == utcnow().date())
        .first()
    )


def generate_todays_outfit(
    db: Session,
    user_id: int,
    user_mood: Optional[str] = None,
    city: Optional[str] = None,
    calendar_events: Optional[List[dict]] = None,
    regenerate: bool = False,
) -> Dict[str, Any]:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)

    existing = _todays_record(db, user_id)
    if existing and not regenerate:
        return {
            "daily_outfit": daily_outfit_to_dict(existing),
            "outfit": serialize_outfit(existing.outfit),
            "message": "Today's outfit already generated",
        }

    weather = get_weather_by_city(city) if city else None
    occasion = occasion_from_events(calendar_events)
    style_type = style_for(user_mood, occasion)

    outfit = create_outfit(
        db,
        user_id,
        style_type,
        occasion,
        weather=(weather or {}).get("condition", "sunny"),
        recently_worn=recently_worn_signatures(db, user_id),
        commit=False,
    )

    daily = existing or DailyOutfit(user_id=user_id, date=utcnow().date())
    daily.outfit_id = outfit.id
    daily.weather = {
        "temperature": weather["temperature"],
        "condition": weather["condition"],
        "humidity": weather["humidity"],
    } if weather else None
    daily.calendar_events = calendar_events or []
    daily.user_mood = user_mood or "casual"
    # A regenerated suggestion has not been worn yet
    daily.is_worn = False
    daily.worn_at = None
    daily.rating = None
    daily.notes = None
    if existing is None:
        db.add(daily)
    db.commit()
    db.refresh(daily)
    db.refresh(outfit)
    logger.info(f"Daily outfit {'regenerated' if existing else 'generated'} for user {user_id}: {occasion}/{style_type}")

    return {
        "daily_outfit": daily_outfit_to_dict(daily),
        "outfit": serialize_outfit(outfit),
        "weather": weather,
        "weather_recommendations": get_weather_based_recommendations(weather) if weather else None,
        "message": "Today's outfit generated successfully",
    }


def get_todays_outfit(db: Session, user_id: int) -> Optional[DailyOutfit]:
    return _todays_record(db, user_id)


def mark_as_worn(
    db: Session,
    user_id: int,
    daily_outfit_id: int,
    rating: Optional[int] = None,
    notes: Optional[str] = None,
) -> DailyOutfit:
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("rating must be between 1 and 5", field="rating")

    daily = (
        db.query(DailyOutfit)
        .filter(DailyOutfit.id == daily_outfit_id, DailyOutfit.user_id == user_id)
        .first()
    )
    if not daily:
        raise NotFoundError("Daily outfit", daily_outfit_id)

    daily.is_worn = True
    daily.worn_at = utcnow()
    if rating:
        daily.rating = rating
    if notes:
        daily.notes = notes
    db.commit()
    db.refresh(daily)
    return daily
