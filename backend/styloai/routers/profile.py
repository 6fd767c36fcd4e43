from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import ProfileSetup, ProfileSetupResponse, UserResponse
from ..utils.auth import get_current_user

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.post("/setup", response_model=ProfileSetupResponse)
def setup_profile(
    payload: ProfileSetup,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save onboarding answers. Omitted fields keep their current value."""
    if payload.gender is not None:
        current_user.gender = payload.gender
    if "style_goals" in payload.model_fields_set:
        current_user.style_goals = list(payload.style_goals)
    if "occasions" in payload.model_fields_set:
        current_user.occasions = list(payload.occasions)

    db.commit()
    db.refresh(current_user)
    return {"message": "Profile setup completed", "user": current_user.to_public_dict()}


@router.get("", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user
