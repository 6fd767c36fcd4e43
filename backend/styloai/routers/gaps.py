from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from ..database import get_db
from ..models import User
from ..schemas import ResolveGapRequest
from ..services.gap_detection_service import detect_wardrobe_gaps, gap_to_dict, get_latest_gap, mark_gap_as_resolved
from ..utils.auth import require_premium

router = APIRouter(prefix="/gaps", tags=["Wardrobe gaps"])


@router.post("/detect")
def detect(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    gap = detect_wardrobe_gaps(db, current_user.id)
    return {
        "success": True,
        "message": "Wardrobe gaps analyzed",
        "data": gap_to_dict(gap),
    }


@router.get("")
def latest(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    gap = get_latest_gap(db, current_user.id)
    if gap is None:
        return {"success": True, "data": None, "message": "No gap analysis found"}
    return {"success": True, "data": gap_to_dict(gap)}


@router.post("/resolve")
def resolve(
    payload: ResolveGapRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    if payload.gap_id is None:
        raise ValidationError("gapId is required", field="gap_id")

    gap = mark_gap_as_resolved(db, current_user.id, payload.gap_id)
    return {"success": True, "message": "Gap marked as resolved", "data": gap_to_dict(gap)}
