"""
Rule-based outfit recommendation: color matching and item selection.
"""
from .color_matcher import check_color_compatibility, normalize_color, is_neutral, NEUTRALS
from .selector import (
    OutfitSelection,
    filter_by_style,
    generate_hairstyle_suggestion,
    select_outfit,
)
