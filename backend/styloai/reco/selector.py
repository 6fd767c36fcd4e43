from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from .color_matcher import check_color_compatibility

CATEGORIES = ("Tops", "Bottoms", "Dresses", "Footwear", "Accessories")

# Style type -> tag keywords (substring match, lowercase)
STYLE_KEYWORDS: Dict[str, List[str]] = {
    "Casual": ["casual", "comfortable", "relaxed"],
    "Attractive": ["sexy", "attractive", "stylish"],
    "Traditional": ["traditional", "classic", "formal"],
    "Trend Aligned": ["trendy", "fashionable", "modern"],
    "Professional": ["professional", "formal", "office", "classic"],
    "Elegant": ["elegant", "formal", "classic"],
}

STYLE_HAIRSTYLES: Dict[str, str] = {
    "Casual": "Relaxed waves or a simple ponytail",
    "Attractive": "Loose curls or sleek straight hair",
    "Traditional": "Classic updo or neat bun",
    "Trend Aligned": "Modern braids or textured waves",
    "Professional": "Polished low bun or sleek side part",
    "Elegant": "Soft chignon or glossy side-swept waves",
}

OCCASION_HAIRSTYLES: Dict[str, str] = {
    "Office": "Professional bun or neat ponytail",
    "Party": "Voluminous curls or elegant updo",
    "Wedding": "Elegant updo with accessories",
    "Travel": "Easy braids or low bun",
    "Daily": "Natural waves or simple style",
    "Interview": "Sleek low bun or neatly combed back",
    "Festival": "Braided crown or bun with floral accents",
}

DEFAULT_HAIRSTYLE = "Style your hair to complement your outfit"


@dataclass
class OutfitSelection:
    """Result of one pass of the rule engine"""
    items: List[Dict[str, Any]] = field(default_factory=list)
    shoes: Optional[Dict[str, Any]] = None
    accessories: List[Dict[str, Any]] = field(default_factory=list)
    hairstyle_suggestion: str = DEFAULT_HAIRSTYLE
    is_recently_worn: bool = False

    @property
    def signature(self) -> FrozenSet[int]:
        return frozenset(i["wardrobe_id"] for i in self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "shoes": self.shoes,
            "accessories": self.accessories,
            "hairstyle_suggestion": self.hairstyle_suggestion,
            "is_recently_worn": self.is_recently_worn,
        }


def _main_entry(item) -> Dict[str, Any]:
    return {"wardrobe_id": item.id, "category": item.category, "image_url": item.image_url}


def _by_category(wardrobe: Iterable) -> Dict[str, list]:
    grouped: Dict[str, list] = {c: [] for c in CATEGORIES}
    for item in wardrobe:
        grouped.setdefault(item.category, []).append(item)
    return grouped


def filter_by_style(items: Sequence, style_type: Optional[str]) -> list:
    """Untagged items always pass; tagged items need a tag containing a style keyword."""
    keywords = STYLE_KEYWORDS.get(style_type or "", [])
    result = []
    for item in items:
        tags = item.style_tags or []
        if not tags:
            result.append(item)
            continue
        if any(kw in tag.lower() for tag in tags for kw in keywords):
            result.append(item)
    return result


def generate_hairstyle_suggestion(style_type: Optional[str], occasion: Optional[str]) -> str:
    if occasion and occasion in OCCASION_HAIRSTYLES:
        return OCCASION_HAIRSTYLES[occasion]
    return STYLE_HAIRSTYLES.get(style_type or "", DEFAULT_HAIRSTYLE)


def _pick_main_items(grouped: Dict[str, list], style_type, occasion, rng: random.Random) -> List[Dict[str, Any]]:
    tops, bottoms, dresses = grouped["Tops"], grouped["Bottoms"], grouped["Dresses"]

    # Prefer a dress for elegant looks and weddings
    if dresses and (style_type == "Elegant" or occasion == "Wedding"):
        return [_main_entry(rng.choice(dresses))]

    if tops and bottoms:
        top = rng.choice(tops)
        bottom = rng.choice(bottoms)
        if check_color_compatibility(top.color, bottom.color) or len(tops) == 1 or len(bottoms) == 1:
            return [_main_entry(top), _main_entry(bottom)]

        compatible_top = next((t for t in tops if check_color_compatibility(t.color, bottom.color)), None)
        if compatible_top is not None:
            return [_main_entry(compatible_top), _main_entry(bottom)]

        compatible_bottom = next((b for b in bottoms if check_color_compatibility(top.color, b.color)), None)
        if compatible_bottom is not None:
            return [_main_entry(top), _main_entry(compatible_bottom)]

        return [_main_entry(top), _main_entry(bottom)]

    if dresses:
        return [_main_entry(rng.choice(dresses))]

    return []


def select_outfit(
    wardrobe: Sequence,
    style_type: Optional[str],
    occasion: Optional[str] = None,
    recently_worn: Optional[Set[FrozenSet[int]]] = None,
    rng: Optional[random.Random] = None,
) -> OutfitSelection:
    """
    Pick main garments, shoes and accessories from a wardrobe.

    `wardrobe` holds objects with id, category, color, style_tags and image_url.
    When the main garments repeat a recently worn signature the pick is retried once.
    """
    rng = rng or random.Random()
    recently_worn = recently_worn or set()
    grouped = _by_category(wardrobe)

    items = _pick_main_items(grouped, style_type, occasion, rng)
    if items and frozenset(i["wardrobe_id"] for i in items) in recently_worn:
        items = _pick_main_items(grouped, style_type, occasion, rng)

    selection = OutfitSelection(
        items=items,
        hairstyle_suggestion=generate_hairstyle_suggestion(style_type, occasion),
    )
    selection.is_recently_worn = bool(items) and selection.signature in recently_worn

    footwear = grouped["Footwear"]
    if footwear:
        candidates = filter_by_style(footwear, style_type) or footwear
        shoe = rng.choice(candidates)
        selection.shoes = {"wardrobe_id": shoe.id, "image_url": shoe.image_url}

    accessories = grouped["Accessories"]
    if accessories:
        count = min(rng.randint(1, 2), len(accessories))
        selection.accessories = [
            {"wardrobe_id": acc.id, "image_url": acc.image_url}
            for acc in rng.sample(accessories, count)
        ]

    return selection
