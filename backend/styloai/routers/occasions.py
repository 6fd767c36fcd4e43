from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import OccasionOutfitRequest
from ..services.occasion_service import generate_occasion_outfit, get_occasion_guides
from ..services.outfit_generator import serialize_outfit
from ..utils.auth import require_premium

router = APIRouter(prefix="/occasions", tags=["Occasion styling"])


@router.post("/generate")
def generate(
    payload: OccasionOutfitRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    outfit, guide = generate_occasion_outfit(db, current_user.id, payload.occasion, payload.style_type)
    return {
        "success": True,
        "data": {"outfit": serialize_outfit(outfit), "styling_guide": guide},
    }


@router.get("/guides")
def guides(current_user: User = Depends(require_premium)):
    return {"success": True, "data": get_occasion_guides()}
