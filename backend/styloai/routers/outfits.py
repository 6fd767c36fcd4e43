from typing import get_args

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, ValidationError
from ..database import get_db
from ..models import Outfit, User
from ..schemas import MessageResponse, OutfitGenerateRequest, UserStyleType
from ..services.outfit_generator import create_outfit, serialize_outfit, wardrobe_lookup_for
from ..utils.auth import get_current_user

router = APIRouter(prefix="/outfits", tags=["Outfits"])

USER_STYLE_TYPES = get_args(UserStyleType)
HISTORY_LIMIT = 50


def _owned_outfit(db: Session, user_id: int, outfit_id: int) -> Outfit:
    outfit = db.query(Outfit).filter(Outfit.id == outfit_id, Outfit.user_id == user_id).first()
    if not outfit:
        raise NotFoundError("Outfit", outfit_id)
    return outfit


@router.post("/generate")
def generate(
    payload: OutfitGenerateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.style_type not in USER_STYLE_TYPES:
        raise ValidationError("Invalid style type", field="style_type")

    outfit = create_outfit(db, current_user.id, payload.style_type, payload.occasion, payload.weather)
    return {"message": "Outfit generated successfully", "outfit": serialize_outfit(outfit)}


@router.get("/history")
def history(
    saved_only: bool = Query(False, description="Only outfits the user saved"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(Outfit).filter(Outfit.user_id == current_user.id)
    if saved_only:
        query = query.filter(Outfit.is_saved.is_(True))
    outfits = query.order_by(Outfit.created_at.desc(), Outfit.id.desc()).limit(HISTORY_LIMIT).all()

    lookup = wardrobe_lookup_for(db, outfits)
    return {
        "outfits": [serialize_outfit(o, lookup) for o in outfits],
        "count": len(outfits),
    }


@router.post("/{outfit_id}/save")
def save_outfit(
    outfit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outfit = _owned_outfit(db, current_user.id, outfit_id)
    outfit.is_saved = True
    db.commit()
    db.refresh(outfit)
    return {"message": "Outfit saved successfully", "outfit": serialize_outfit(outfit)}


@router.delete("/{outfit_id}", response_model=MessageResponse)
def delete_outfit(
    outfit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outfit = _owned_outfit(db, current_user.id, outfit_id)
    db.delete(outfit)
    db.commit()
    return {"message": "Outfit deleted successfully"}
