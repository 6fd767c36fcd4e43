"""
Weekly outfit planner.
"""
import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, StyloAIException
from ..models import Outfit, Planner, PlannerEntry, User
from .calendar_service import get_week_events, is_calendar_connected
from .outfit_generator import build_outfit, generate_outfit, recently_worn_signatures, serialize_outfit
from .weather_service import get_weather_by_city

logger = logging.getLogger(__name__)

EVENT_OCCASIONS = {"office": "Office", "party": "Party", "travel": "Travel"}


def _active_plan(db: Session, user_id: int, week_start: date) -> Optional[Planner]:
    return (
        db.query(Planner)
        .filter(
            Planner.user_id == user_id,
            Planner.week_start_date >= week_start,
            Planner.week_start_date <= week_start + timedelta(days=6),
            Planner.is_active.is_(True),
        )
        .order_by(Planner.created_at.desc())
        .first()
    )


def occasion_for_day(day: date, day_events: List[dict]) -> str:
    if day_events:
        return EVENT_OCCASIONS.get(day_events[0].get("type"), "Daily")
    # Weekends default to going out
    if day.weekday() >= 5:
        return "Party"
    return "Daily"


def _events_on(day: date, events: List[dict]) -> List[dict]:
    iso = day.isoformat()
    return [e for e in events if (e.get("start") or "")[:10] == iso]


def _week_events(db: Session, user: User, week_start: date) -> List[dict]:
    if not is_calendar_connected(user):
        return []
    try:
        return get_week_events(db, user, week_start)
    except StyloAIException as e:
        logger.info(f"Calendar not available for planner: {e.message}")
        return []


def planner_to_dict(planner: Planner, include_outfits: bool = False) -> Dict[str, Any]:
    entries = []
    for entry in planner.entries:
        data = {
            "id": entry.id,
            "date": entry.date,
            "outfit_id": entry.outfit_id,
            "occasion": entry.occasion,
            "weather": entry.weather,
            "is_confirmed": entry.is_confirmed,
            "is_recently_worn": entry.is_recently_worn,
        }
        if include_outfits:
            data["outfit"] = serialize_outfit(entry.outfit)
        entries.append(data)
    return {
        "id": planner.id,
        "user_id": planner.user_id,
        "week_start_date": planner.week_start_date,
        "week_end_date": planner.week_end_date,
        "is_active": planner.is_active,
        "outfits": entries,
        "created_at": planner.created_at,
    }


def generate_weekly_plan(
    db: Session,
    user_id: int,
    week_start: date,
    city: Optional[str] = None,
    regenerate: bool = False,
) -> Planner:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)

    existing = _active_plan(db, user_id, week_start)
    if existing and not regenerate:
        return existing

    recently_worn = recently_worn_signatures(db, user_id)
    events = _week_events(db, user, week_start)
    # Current conditions stand in for the whole week
    weather = get_weather_by_city(city) if city else None

    entries = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        occasion = occasion_for_day(day, _events_on(day, events))
        style_type = "Professional" if occasion == "Office" else "Casual"

        selection = generate_outfit(db, user_id, style_type, occasion, recently_worn=recently_worn)
        outfit = build_outfit(user_id, selection, style_type, occasion,
                              weather=(weather or {}).get("condition", "sunny"))
        db.add(outfit)
        db.flush()

        entries.append(PlannerEntry(
            date=day,
            outfit_id=outfit.id,
            occasion=occasion,
            weather={"temperature": weather["temperature"], "condition": weather["condition"]} if weather else None,
            is_confirmed=False,
            is_recently_worn=selection.is_recently_worn,
        ))

    planner = existing or Planner(user_id=user_id, week_start_date=week_start, is_active=True)
    planner.week_end_date = week_start + timedelta(days=6)
    planner.entries = entries
    if existing is None:
        db.add(planner)
    db.commit()
    db.refresh(planner)
    logger.info(f"Weekly plan {'regenerated' if existing else 'generated'} for user {user_id} from {week_start}")
    return planner


def get_weekly_plan(db: Session, user_id: int, week_start: date) -> Optional[Planner]:
    return _active_plan(db, user_id, week_start)


def confirm_outfit(db: Session, user_id: int, planner_id: int, day: date, outfit_id: int) -> Planner:
    planner = db.query(Planner).filter(Planner.id == planner_id, Planner.user_id == user_id).first()
    if not planner:
        raise NotFoundError("Planner", planner_id)

    outfit = db.query(Outfit).filter(Outfit.id == outfit_id, Outfit.user_id == user_id).first()
    if not outfit:
        raise NotFoundError("Outfit", outfit_id)

    entry = next((e for e in planner.entries if e.date == day), None)
    if entry is not None:
        entry.outfit_id = outfit.id
        entry.is_confirmed = True
    else:
        planner.entries.append(PlannerEntry(date=day, outfit_id=outfit.id, is_confirmed=True))

    db.commit()
    db.refresh(planner)
    return planner
