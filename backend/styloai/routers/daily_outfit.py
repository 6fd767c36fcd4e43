from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import DailyOutfitRequest, MarkWornRequest
from ..services.daily_outfit_service import (
    daily_outfit_to_dict,
    generate_todays_outfit,
    get_todays_outfit,
    mark_as_worn,
)
from ..utils.auth import require_premium

router = APIRouter(prefix="/daily-outfit", tags=["Daily outfit"])


@router.post("/generate")
def generate(
    payload: DailyOutfitRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    result = generate_todays_outfit(
        db,
        current_user.id,
        user_mood=payload.user_mood,
        city=payload.city,
        calendar_events=[e.model_dump() for e in payload.calendar_events],
        regenerate=payload.regenerate,
    )
    message = result.pop("message")
    return {"success": True, "message": message, "data": result}


@router.get("/today")
def today(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    daily = get_todays_outfit(db, current_user.id)
    if daily is None:
        return {"success": True, "data": None, "message": "No outfit generated for today"}
    return {"success": True, "data": daily_outfit_to_dict(daily, include_outfit=True)}


@router.post("/mark-worn")
def mark_worn(
    payload: MarkWornRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    daily = mark_as_worn(db, current_user.id, payload.daily_outfit_id, payload.rating, payload.notes)
    return {
        "success": True,
        "message": "Outfit marked as worn",
        "data": daily_outfit_to_dict(daily),
    }
