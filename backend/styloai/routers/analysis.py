from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..services.analysis_service import upload_body_image, upload_face_image
from ..utils.auth import get_current_user

router = APIRouter(prefix="/analysis", tags=["Analysis"])


@router.post("/body")
async def analyze_body(
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Upload a full-body photo and store the body analysis on the profile."""
    body_analysis = await upload_body_image(db, current_user, image)
    return {"message": "Body image uploaded and analyzed", "body_analysis": body_analysis}


@router.post("/face")
async def analyze_face(
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    face_analysis = await upload_face_image(db, current_user, image)
    return {"message": "Face image uploaded and analyzed", "face_analysis": face_analysis}
