"""
Body and face photo uploads with their stored analysis.
"""
import logging
from typing import Any, Dict

from fastapi import UploadFile
from sqlalchemy.orm import Session

from ..config import settings
from ..core.exceptions import ExternalServiceError
from ..models import User, utcnow
from ..utils.cloudinary_helper import store_image
from .rekognition_service import analyze_body_image, analyze_face_image

logger = logging.getLogger(__name__)


def _placeholder(kind: str) -> Dict[str, Any]:
    return {
        "uploaded_at": utcnow().isoformat(),
        "analysis": f"{kind} image uploaded successfully. AI analysis pending.",
    }


def _record(image_url: str, analysis_data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "image_url": image_url,
        "analysis_data": analysis_data,
        "uploaded_at": utcnow().isoformat(),
    }


async def upload_body_image(db: Session, user: User, file: UploadFile) -> Dict[str, Any]:
    stored = await store_image(file, folder=f"{settings.CLOUDINARY_FOLDER}/body")

    analysis_data = _placeholder("Body")
    if settings.aws_configured:
        try:
            analysis_data = analyze_body_image(stored["content"])
        except ExternalServiceError as e:
            # Keep the upload; the analysis can be redone later
            logger.warning(f"Body analysis failed for user {user.id}, storing placeholder: {e.message}")

    user.body_analysis = _record(stored["url"], analysis_data)
    db.commit()
    db.refresh(user)
    return user.body_analysis


async def upload_face_image(db: Session, user: User, file: UploadFile) -> Dict[str, Any]:
    stored = await store_image(file, folder=f"{settings.CLOUDINARY_FOLDER}/face")

    analysis_data = _placeholder("Face")
    if settings.aws_configured:
        analysis_data = analyze_face_image(stored["content"])

    user.face_analysis = _record(stored["url"], analysis_data)
    db.commit()
    db.refresh(user)
    return user.face_analysis
