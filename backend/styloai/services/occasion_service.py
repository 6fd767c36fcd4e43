"""
Occasion styling: guides per occasion and occasion-specific outfit generation.
"""
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from .outfit_generator import create_outfit

OCCASIONS = ["Office", "Party", "Wedding", "Interview", "Festival", "Travel"]

STYLING_GUIDES: Dict[str, dict] = {
    "Office": {
        "title": "Office Styling Guide",
        "tips": [
            "Choose professional, well-fitted clothing",
            "Stick to neutral colors or subtle patterns",
            "Ensure clothes are clean and wrinkle-free",
            "Wear comfortable yet professional footwear",
            "Keep accessories minimal and elegant",
        ],
        "do": [
            "Wear tailored pieces",
            "Choose appropriate length for skirts/dresses",
            "Layer with blazers or cardigans",
        ],
        "dont": [
            "Avoid overly casual items",
            "Skip revealing or flashy clothing",
            "Avoid excessive accessories",
        ],
    },
    "Party": {
        "title": "Party Styling Guide",
        "tips": [
            "Express your personality with bold choices",
            "Experiment with colors and patterns",
            "Add statement accessories",
            "Choose comfortable yet stylish footwear",
            "Consider the party theme",
        ],
        "do": [
            "Wear something that makes you feel confident",
            "Add sparkle or shine for evening parties",
            "Consider the venue and dress code",
        ],
        "dont": [
            "Don't overdress or underdress",
            "Avoid uncomfortable shoes for long parties",
        ],
    },
    "Wedding": {
        "title": "Wedding Styling Guide",
        "tips": [
            "Choose elegant and sophisticated pieces",
            "Avoid white (unless you're the bride)",
            "Consider the wedding theme and venue",
            "Wear comfortable shoes for dancing",
            "Add elegant accessories",
        ],
        "do": [
            "Dress appropriately for the wedding type",
            "Consider the season and weather",
            "Wear something you can move in comfortably",
        ],
        "dont": [
            "Don't wear white to someone else's wedding",
            "Avoid overly casual attire",
            "Don't upstage the bride",
        ],
    },
    "Interview": {
        "title": "Interview Styling Guide",
        "tips": [
            "Dress professionally and conservatively",
            "Choose well-fitted, clean clothing",
            "Stick to neutral colors",
            "Wear comfortable, professional shoes",
            "Keep accessories minimal",
        ],
        "do": [
            "Research the company dress code",
            "Ensure clothes are clean and pressed",
            "Wear something that makes you feel confident",
        ],
        "dont": [
            "Avoid casual or flashy clothing",
            "Don't wear strong perfumes",
            "Avoid distracting accessories",
        ],
    },
    "Festival": {
        "title": "Festival Styling Guide",
        "tips": [
            "Wear comfortable, weather-appropriate clothing",
            "Choose items you don't mind getting dirty",
            "Layer for changing temperatures",
            "Wear comfortable, closed-toe shoes",
            "Add fun accessories and colors",
        ],
        "do": [
            "Consider the weather forecast",
            "Wear sunscreen and hats",
            "Bring a light jacket or sweater",
        ],
        "dont": [
            "Avoid expensive or delicate items",
            "Don't wear uncomfortable shoes",
        ],
    },
    "Travel": {
        "title": "Travel Styling Guide",
        "tips": [
            "Choose comfortable, versatile pieces",
            "Layer for different climates",
            "Wear comfortable shoes for walking",
            "Pack items that mix and match",
            "Consider the destination culture",
        ],
        "do": [
            "Research the destination weather",
            "Pack versatile, wrinkle-resistant items",
            "Wear comfortable layers for flights",
        ],
        "dont": [
            "Avoid overpacking",
            "Don't wear uncomfortable shoes for long travel",
        ],
    },
}

DEFAULT_GUIDE = {
    "title": "Styling Guide",
    "tips": ["Choose clothing that makes you feel confident and comfortable"],
    "do": [],
    "dont": [],
}


def get_occasion_styling_guide(occasion: str) -> dict:
    return STYLING_GUIDES.get(occasion, DEFAULT_GUIDE)


def get_occasion_guides() -> List[dict]:
    return [{"occasion": occ, "guide": get_occasion_styling_guide(occ)} for occ in OCCASIONS]


def style_for_occasion(occasion: str, style_type: Optional[str] = None) -> str:
    if occasion in ("Office", "Interview"):
        return "Professional"
    if occasion in ("Party", "Festival"):
        return "Attractive"
    return style_type or "Casual"


def generate_occasion_outfit(db: Session, user_id: int, occasion: Optional[str],
                             style_type: Optional[str] = None):
    if not occasion:
        raise ValidationError("occasion is required", field="occasion")
    if occasion not in OCCASIONS:
        raise ValidationError(f"occasion must be one of: {', '.join(OCCASIONS)}", field="occasion")

    final_style = style_for_occasion(occasion, style_type)
    outfit = create_outfit(db, user_id, final_style, occasion)
    return outfit, get_occasion_styling_guide(occasion)
