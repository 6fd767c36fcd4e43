from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from ..database import get_db
from ..models import User
from ..schemas import ConfirmOutfitRequest, WeeklyPlanRequest
from ..services.planner_service import confirm_outfit, generate_weekly_plan, get_weekly_plan, planner_to_dict
from ..utils.auth import require_premium

router = APIRouter(prefix="/planner", tags=["Weekly planner"])


@router.post("/generate")
def generate(
    payload: WeeklyPlanRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    if payload.week_start_date is None:
        raise ValidationError("weekStartDate is required", field="week_start_date")

    planner = generate_weekly_plan(
        db, current_user.id, payload.week_start_date, city=payload.city, regenerate=payload.regenerate
    )
    return {
        "success": True,
        "message": "Weekly plan generated successfully",
        "data": planner_to_dict(planner, include_outfits=True),
    }


@router.get("/weekly")
def weekly(
    week_start_date: Optional[date] = Query(None, description="First day of the week (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    if week_start_date is None:
        raise ValidationError("weekStartDate is required", field="week_start_date")

    planner = get_weekly_plan(db, current_user.id, week_start_date)
    if planner is None:
        return {"success": True, "data": None, "message": "No plan found for this week"}
    return {"success": True, "data": planner_to_dict(planner, include_outfits=True)}


@router.post("/confirm")
def confirm(
    payload: ConfirmOutfitRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    if payload.planner_id is None or payload.date is None or payload.outfit_id is None:
        raise ValidationError("plannerId, date, and outfitId are required")

    planner = confirm_outfit(db, current_user.id, payload.planner_id, payload.date, payload.outfit_id)
    return {
        "success": True,
        "message": "Outfit confirmed",
        "data": planner_to_dict(planner),
    }
