import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from ..config import settings
from ..core.exceptions import NotFoundError, ValidationError
from ..database import get_db
from ..models import User, WardrobeItem
from ..reco.selector import CATEGORIES
from ..schemas import MessageResponse, WardrobeItemCreated, WardrobeList
from ..utils.auth import get_current_user
from ..utils.cloudinary_helper import delete_image_from_cloudinary, store_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wardrobe", tags=["Wardrobe"])


def parse_style_tags(raw: Optional[str]) -> List[str]:
    """Accept a JSON array string or a comma separated list."""
    if not raw or not raw.strip():
        return []
    raw = raw.strip()
    if raw.startswith("["):
        try:
            tags = json.loads(raw)
        except ValueError:
            raise ValidationError("style_tags must be a JSON array or a comma separated list", field="style_tags")
        if not isinstance(tags, list):
            raise ValidationError("style_tags must be a JSON array or a comma separated list", field="style_tags")
        return [str(t).strip() for t in tags if str(t).strip()]
    return [t.strip() for t in raw.split(",") if t.strip()]


@router.post("/upload", response_model=WardrobeItemCreated, status_code=status.HTTP_201_CREATED)
async def upload_item(
    image: Optional[UploadFile] = File(None),
    category: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    style_tags: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if image is None or not image.filename:
        raise ValidationError("No image file provided", field="image")
    if category not in CATEGORIES:
        raise ValidationError("Invalid category", field="category")
    tags = parse_style_tags(style_tags)

    stored = await store_image(image, folder=f"{settings.CLOUDINARY_FOLDER}/wardrobe/{current_user.id}")

    item = WardrobeItem(
        user_id=current_user.id,
        category=category,
        color=(color or "").strip(),
        style_tags=tags,
        image_url=stored["url"],
        cloudinary_public_id=stored["public_id"],
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Wardrobe item {item.id} ({category}) added for user {current_user.id}")

    return {"message": "Wardrobe item uploaded successfully", "item": item}


@router.get("", response_model=WardrobeList)
def list_items(
    category: Optional[str] = Query(None, description="Filter by category (Tops/Bottoms/Dresses/Footwear/Accessories)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = db.query(WardrobeItem).filter(WardrobeItem.user_id == current_user.id)
    if category:
        query = query.filter(WardrobeItem.category == category)
    items = query.order_by(WardrobeItem.created_at.desc(), WardrobeItem.id.desc()).all()
    return {"items": items, "count": len(items)}


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = (
        db.query(WardrobeItem)
        .filter(WardrobeItem.id == item_id, WardrobeItem.user_id == current_user.id)
        .first()
    )
    if not item:
        raise NotFoundError("Wardrobe item", item_id)

    if item.cloudinary_public_id:
        # Best effort, the record goes either way
        delete_image_from_cloudinary(item.cloudinary_public_id)

    db.delete(item)
    db.commit()
    return {"message": "Wardrobe item deleted successfully"}
