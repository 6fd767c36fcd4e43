"""
Wardrobe gap detection: threshold rules over category counts, occasions and colors.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models import User, WardrobeGap, WardrobeItem, utcnow
from ..reco import is_neutral
from ..reco.selector import CATEGORIES

logger = logging.getLogger(__name__)

SHOPPING_PLATFORMS = [
    ("Amazon", "https://www.amazon.in/s?k="),
    ("Flipkart", "https://www.flipkart.com/search?q="),
    ("Myntra", "https://www.myntra.com/"),
    ("Ajio", "https://www.ajio.com/search/?text="),
]


def generate_shopping_links(category: str, style: str = "") -> List[Dict[str, Any]]:
    search_terms = f"{category} {style}".strip().lower()
    encoded = quote(search_terms, safe="")
    return [
        {"platform": platform, "url": f"{base}{encoded}", "price": None, "currency": "INR"}
        for platform, base in SHOPPING_PLATFORMS
    ]


def get_suggested_colors(existing_colors: List[str], default_colors: List[str]) -> List[str]:
    """Two of the user's own colors plus two defaults, or four defaults for a colorless wardrobe."""
    if existing_colors:
        return list(dict.fromkeys(existing_colors[:2] + default_colors[:2]))
    return default_colors[:4]


def _gap(category, item_name, description, priority, suggested_colors, style="") -> Dict[str, Any]:
    return {
        "category": category,
        "item_name": item_name,
        "description": description,
        "priority": priority,
        "suggested_colors": suggested_colors,
        "shopping_links": generate_shopping_links(category, style),
    }


def find_missing_items(wardrobe: List[WardrobeItem], occasions: List[str]) -> List[Dict[str, Any]]:
    counts = {c: 0 for c in CATEGORIES}
    for item in wardrobe:
        counts[item.category] = counts.get(item.category, 0) + 1

    # Distinct colors in first-seen order
    colors = list(dict.fromkeys(item.color for item in wardrobe if item.color))
    missing = []

    if counts["Tops"] < 3:
        missing.append(_gap(
            "Tops", "Basic Tops",
            f"You have {counts['Tops']} top(s). Consider adding versatile tops for different occasions.",
            "high" if counts["Tops"] == 0 else "medium",
            get_suggested_colors(colors, ["white", "black", "navy", "beige"]),
        ))

    if counts["Bottoms"] < 2:
        missing.append(_gap(
            "Bottoms", "Basic Bottoms",
            f"You have {counts['Bottoms']} bottom(s). Add versatile bottoms for different styles.",
            "high" if counts["Bottoms"] == 0 else "medium",
            get_suggested_colors(colors, ["black", "navy", "beige", "denim"]),
        ))

    if counts["Footwear"] < 1:
        missing.append(_gap(
            "Footwear", "Versatile Footwear",
            "Add footwear to complete your outfits. Consider versatile options that work with multiple styles.",
            "high",
            ["black", "brown", "white"],
        ))

    if "Office" in occasions and counts["Tops"] < 5:
        missing.append(_gap(
            "Tops", "Professional Tops",
            "Add more professional tops for office occasions.",
            "medium",
            ["white", "navy", "black", "gray"],
            style="Office",
        ))

    if "Party" in occasions and counts["Dresses"] < 2:
        missing.append(_gap(
            "Dresses", "Party Dresses",
            "Add party dresses for special occasions.",
            "low",
            ["black", "red", "blue", "green"],
            style="Party",
        ))

    if counts["Accessories"] < 3:
        missing.append(_gap(
            "Accessories", "Versatile Accessories",
            "Add accessories to enhance your outfits. Consider belts, bags, jewelry, and scarves.",
            "low",
            ["black", "brown", "gold", "silver"],
        ))

    if wardrobe and not any(is_neutral(c) for c in colors):
        missing.append(_gap(
            "Tops", "Neutral Basics",
            "Add neutral-colored basics that can be paired with any outfit.",
            "medium",
            ["black", "white", "navy", "beige"],
            style="Basics",
        ))

    return missing


def detect_wardrobe_gaps(db: Session, user_id: int) -> WardrobeGap:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)

    wardrobe = db.query(WardrobeItem).filter(WardrobeItem.user_id == user_id).all()
    missing_items = find_missing_items(wardrobe, user.occasions or [])

    gap = (
        db.query(WardrobeGap)
        .filter(WardrobeGap.user_id == user_id, WardrobeGap.is_resolved.is_(False))
        .first()
    )
    if gap is None:
        gap = WardrobeGap(user_id=user_id, is_resolved=False)
        db.add(gap)
    gap.missing_items = missing_items
    gap.analysis_date = utcnow()
    db.commit()
    db.refresh(gap)
    logger.info(f"Gap analysis for user {user_id}: {len(missing_items)} missing item(s)")
    return gap


def get_latest_gap(db: Session, user_id: int) -> Optional[WardrobeGap]:
    return (
        db.query(WardrobeGap)
        .filter(WardrobeGap.user_id == user_id)
        .order_by(WardrobeGap.analysis_date.desc(), WardrobeGap.id.desc())
        .first()
    )


def mark_gap_as_resolved(db: Session, user_id: int, gap_id: int) -> WardrobeGap:
    gap = db.query(WardrobeGap).filter(WardrobeGap.id == gap_id, WardrobeGap.user_id == user_id).first()
    if not gap:
        raise NotFoundError("Wardrobe gap", gap_id)
    gap.is_resolved = True
    db.commit()
    db.refresh(gap)
    return gap


def gap_to_dict(gap: WardrobeGap) -> Dict[str, Any]:
    return {
        "id": gap.id,
        "user_id": gap.user_id,
        "missing_items": gap.missing_items or [],
        "analysis_date": gap.analysis_date,
        "is_resolved": gap.is_resolved,
    }
