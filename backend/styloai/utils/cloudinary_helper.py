"""
Cloudinary image upload helper functions
"""
import logging
import os
import uuid
from typing import Optional, Dict, Any

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from fastapi import UploadFile

from ..config import settings
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"}


"""Initialize Cloudinary with configuration from settings"""
def initialize_cloudinary():
    if settings.cloudinary_configured:
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True
        )
        return True
    return False


def cloudinary_enabled() -> bool:
    return settings.USE_CLOUDINARY and settings.cloudinary_configured


def _save_locally(content: bytes, extension: str) -> Dict[str, Any]:
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    filename = f"{uuid.uuid4().hex}{extension}"
    with open(os.path.join(settings.UPLOAD_DIR, filename), "wb") as fh:
        fh.write(content)
    return {
        "url": f"{settings.BACKEND_URL.rstrip('/')}/uploads/{filename}",
        "public_id": None,
        "uploaded": False,
    }


"""     Store an uploaded image
    Args:
        file: the multipart upload
        folder: Cloudinary folder name (e.g. styloai/wardrobe/<user_id>)
    Returns:
        Dict with 'url', 'public_id' and 'uploaded' (True when stored on Cloudinary)
    Raises:
        ValidationError: missing, empty, oversized or non-image upload
"""
async def store_image(file: Optional[UploadFile], folder: Optional[str] = None) -> Dict[str, Any]:
    if file is None or not file.filename:
        raise ValidationError("No image file provided", field="image")

    extension = os.path.splitext(file.filename)[1].lower() or ".jpg"
    if extension not in ALLOWED_IMAGE_EXTENSIONS or (
        file.content_type and not file.content_type.startswith("image/")
    ):
        raise ValidationError("Only image files are allowed", field="image")

    content = await file.read()
    if not content:
        raise ValidationError("No image file provided", field="image")
    if len(content) > settings.MAX_IMAGE_SIZE:
        raise ValidationError(
            f"Image too large. Maximum size is {settings.MAX_IMAGE_SIZE // (1024 * 1024)}MB",
            field="image"
        )

    if cloudinary_enabled():
        initialize_cloudinary()
        try:
            result = cloudinary.uploader.upload(
                content,
                folder=folder or settings.CLOUDINARY_FOLDER,
                resource_type="image",
            )
            return {
                "url": result.get("secure_url"),
                "public_id": result.get("public_id"),
                "uploaded": True,
                "content": content,
            }
        except cloudinary.exceptions.Error as e:
            # Fallback to local storage so the upload still succeeds
            logger.warning(f"Cloudinary upload failed, storing locally: {e}")

    stored = _save_locally(content, extension)
    stored["content"] = content
    return stored


"""    Delete an image from Cloudinary
    Args:
        public_id: The Cloudinary public ID of the image
    Returns:
        bool: True if deletion was successful
"""
def delete_image_from_cloudinary(public_id: Optional[str]) -> bool:
    if not public_id or not settings.cloudinary_configured:
        return False

    try:
        initialize_cloudinary()
        result = cloudinary.uploader.destroy(public_id)
        return result.get("result") == "ok"
    except cloudinary.exceptions.Error as e:
        logger.error(f"Failed to delete image from Cloudinary: {e}")
        return False


def get_cloudinary_status() -> Dict[str, Any]:
    """Get Cloudinary configuration status"""
    return {
        "enabled": settings.USE_CLOUDINARY,
        "configured": settings.cloudinary_configured,
        "cloud_name": settings.CLOUDINARY_CLOUD_NAME if settings.cloudinary_configured else None,
        "folder": settings.CLOUDINARY_FOLDER
    }
