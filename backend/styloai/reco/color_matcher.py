from __future__ import annotations

from typing import Dict, List, Optional

import webcolors

# Neutral colors go with everything
NEUTRALS = ("black", "white", "gray", "grey", "beige", "navy", "brown")

COMPLEMENTARY: Dict[str, List[str]] = {
    "red": ["green", "blue"],
    "blue": ["orange", "red"],
    "yellow": ["purple", "blue"],
    "green": ["red", "pink"],
    "purple": ["yellow", "green"],
    "pink": ["green", "blue"],
    "orange": ["blue", "purple"],
}

ANALOGOUS: Dict[str, List[str]] = {
    "red": ["orange", "pink"],
    "blue": ["purple", "green"],
    "yellow": ["orange", "green"],
    "green": ["blue", "yellow"],
    "purple": ["blue", "pink"],
}


def normalize_color(color: Optional[str]) -> str:
    """Lowercase a color; '#rrggbb' codes become their CSS name when one matches exactly."""
    if not color:
        return ""
    value = color.strip().lower()
    if value.startswith("#"):
        try:
            return webcolors.hex_to_name(value, spec="css3")
        except ValueError:
            return value
    return value


def is_neutral(color: Optional[str]) -> bool:
    return normalize_color(color) in NEUTRALS


def check_color_compatibility(color1: Optional[str], color2: Optional[str]) -> bool:
    """Basic color rules. Table lookups are keyed by the first color only."""
    if not color1 or not color2:
        return True  # unspecified colors never block a pairing

    c1 = normalize_color(color1)
    c2 = normalize_color(color2)

    if c1 in NEUTRALS or c2 in NEUTRALS:
        return True
    if c1 == c2:
        return True
    if c2 in COMPLEMENTARY.get(c1, []):
        return True
    if c2 in ANALOGOUS.get(c1, []):
        return True
    return False
