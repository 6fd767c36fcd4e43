from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from ..database import get_db
from ..models import User
from ..schemas import TrackWornRequest
from ..services.style_history_service import (
    get_style_history,
    get_style_progress,
    history_to_dict,
    track_worn_outfit,
)
from ..utils.auth import get_current_user

router = APIRouter(prefix="/style-history", tags=["Style history"])


@router.post("/track")
def track(
    payload: TrackWornRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Record a worn outfit. worn_date defaults to now."""
    if payload.outfit_id is None:
        raise ValidationError("outfitId is required", field="outfit_id")

    entry = track_worn_outfit(
        db,
        current_user.id,
        payload.outfit_id,
        worn_date=payload.worn_date,
        rating=payload.rating,
        feedback=payload.feedback,
        photos=[p.model_dump() for p in payload.photos],
    )
    return {"success": True, "message": "Outfit tracked", "data": history_to_dict(entry)}


@router.get("/history")
def history(
    limit: int = Query(30, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entries = get_style_history(db, current_user.id, limit=limit)
    return {"success": True, "data": [history_to_dict(e) for e in entries]}


@router.get("/progress")
def progress(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"success": True, "data": get_style_progress(db, current_user.id)}
