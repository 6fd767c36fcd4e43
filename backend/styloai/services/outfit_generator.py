"""
Builds outfits from a user's stored wardrobe and persists them.
"""
import logging
import random
from datetime import timedelta
from typing import FrozenSet, Optional, Set

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, ValidationError
from ..models import DailyOutfit, Outfit, StyleHistory, User, WardrobeItem, utcnow
from ..reco import OutfitSelection, select_outfit

logger = logging.getLogger(__name__)


def generate_outfit(
    db: Session,
    user_id: int,
    style_type: str,
    occasion: Optional[str] = None,
    recently_worn: Optional[Set[FrozenSet[int]]] = None,
    rng: Optional[random.Random] = None,
) -> OutfitSelection:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)

    wardrobe = db.query(WardrobeItem).filter(WardrobeItem.user_id == user_id).all()
    if not wardrobe:
        raise ValidationError("No items in wardrobe")

    selection = select_outfit(wardrobe, style_type, occasion, recently_worn=recently_worn, rng=rng)
    logger.debug(
        f"Selected outfit for user {user_id}: style={style_type} occasion={occasion} "
        f"items={sorted(selection.signature)} repeat={selection.is_recently_worn}"
    )
    return selection


def build_outfit(user_id: int, selection: OutfitSelection, style_type: str,
                 occasion: Optional[str] = None, weather: Optional[str] = None) -> Outfit:
    return Outfit(
        user_id=user_id,
        items=selection.items,
        style_type=style_type,
        occasion=occasion,
        weather=weather,
        shoes=selection.shoes,
        accessories=selection.accessories,
        hairstyle_suggestion=selection.hairstyle_suggestion,
        is_saved=False,
    )


def create_outfit(
    db: Session,
    user_id: int,
    style_type: str,
    occasion: Optional[str] = None,
    weather: Optional[str] = None,
    recently_worn: Optional[Set[FrozenSet[int]]] = None,
    commit: bool = True,
) -> Outfit:
    """Generate and store an outfit (not saved to favourites)."""
    selection = generate_outfit(db, user_id, style_type, occasion, recently_worn=recently_worn)
    outfit = build_outfit(user_id, selection, style_type, occasion, weather)
    db.add(outfit)
    if commit:
        db.commit()
        db.refresh(outfit)
    else:
        db.flush()
    return outfit


def serialize_outfit(outfit: Optional[Outfit], wardrobe_lookup: Optional[dict] = None) -> Optional[dict]:
    """Outfit as JSON; with a lookup of id -> WardrobeItem the pieces get color/category details."""
    if outfit is None:
        return None

    def resolve(entry):
        if entry is None:
            return None
        data = dict(entry)
        item = (wardrobe_lookup or {}).get(entry.get("wardrobe_id"))
        if item is not None:
            data["item"] = {
                "id": item.id,
                "category": item.category,
                "image_url": item.image_url,
                "color": item.color,
            }
        elif wardrobe_lookup is not None:
            data["item"] = None
        return data

    return {
        "id": outfit.id,
        "user_id": outfit.user_id,
        "items": [resolve(i) for i in outfit.items or []],
        "style_type": outfit.style_type,
        "occasion": outfit.occasion,
        "weather": outfit.weather,
        "shoes": resolve(outfit.shoes),
        "accessories": [resolve(a) for a in outfit.accessories or []],
        "hairstyle_suggestion": outfit.hairstyle_suggestion,
        "is_saved": outfit.is_saved,
        "created_at": outfit.created_at,
        "updated_at": outfit.updated_at,
    }


def wardrobe_lookup_for(db: Session, outfits) -> dict:
    ids = {i for o in outfits for i in o.item_ids()}
    if not ids:
        return {}
    items = db.query(WardrobeItem).filter(WardrobeItem.id.in_(ids)).all()
    return {item.id: item for item in items}


def recently_worn_signatures(db: Session, user_id: int, days: int = 30) -> Set[FrozenSet[int]]:
    """Main-garment signatures of outfits marked worn within the last `days` days."""
    since = utcnow() - timedelta(days=days)
    worn = (
        db.query(Outfit)
        .join(DailyOutfit, DailyOutfit.outfit_id == Outfit.id)
        .filter(
            DailyOutfit.user_id == user_id,
            DailyOutfit.is_worn.is_(True),
            DailyOutfit.worn_at >= since,
        )
        .all()
    )
    tracked = (
        db.query(Outfit)
        .join(StyleHistory, StyleHistory.outfit_id == Outfit.id)
        .filter(StyleHistory.user_id == user_id, StyleHistory.worn_date >= since)
        .all()
    )
    return {o.signature() for o in worn + tracked if o.items}
