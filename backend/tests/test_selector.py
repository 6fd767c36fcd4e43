"""
Tests for the rule-based outfit selector.
"""
import random
from types import SimpleNamespace

import pytest

from styloai.reco.color_matcher import check_color_compatibility
from styloai.reco.selector import (
    DEFAULT_HAIRSTYLE,
    filter_by_style,
    generate_hairstyle_suggestion,
    select_outfit,
)


def item(item_id, category, color="", tags=None):
    return SimpleNamespace(
        id=item_id,
        category=category,
        color=color,
        style_tags=tags or [],
        image_url=f"https://example.com/{item_id}.jpg",
    )


class ScriptedRandom:
    """Stand-in rng whose choice() returns the items with the scripted ids, in order"""

    def __init__(self, picks):
        self.picks = list(picks)

    def choice(self, seq):
        wanted = self.picks.pop(0)
        return next(i for i in seq if i.id == wanted)


@pytest.fixture
def wardrobe():
    return [
        item(1, "Tops", "white", ["casual"]),
        item(2, "Tops", "red", ["party"]),
        item(3, "Bottoms", "black"),
        item(4, "Bottoms", "blue", ["formal"]),
        item(5, "Dresses", "green", ["elegant"]),
        item(6, "Footwear", "brown", ["formal"]),
        item(7, "Footwear", "white", ["casual"]),
        item(8, "Accessories", "gold"),
        item(9, "Accessories", "silver"),
        item(10, "Accessories", "black"),
    ]


# =============================================================================
# filter_by_style
# =============================================================================

class TestFilterByStyle:
    def test_untagged_items_always_pass(self):
        items = [item(1, "Tops"), item(2, "Tops", tags=["sporty"])]
        assert [i.id for i in filter_by_style(items, "Casual")] == [1]

    def test_keyword_substring_match(self):
        items = [item(1, "Tops", tags=["Semi-Formal"]), item(2, "Tops", tags=["beach"])]
        assert [i.id for i in filter_by_style(items, "Traditional")] == [1]

    def test_internal_styles(self):
        items = [item(1, "Tops", tags=["office wear"]), item(2, "Tops", tags=["elegant"])]
        assert [i.id for i in filter_by_style(items, "Professional")] == [1]
        assert [i.id for i in filter_by_style(items, "Elegant")] == [2]

    def test_unknown_style_keeps_only_untagged(self):
        items = [item(1, "Tops"), item(2, "Tops", tags=["casual"])]
        assert [i.id for i in filter_by_style(items, "Unknown")] == [1]


# =============================================================================
# Hairstyles
# =============================================================================

class TestHairstyleSuggestion:
    def test_occasion_wins(self):
        assert generate_hairstyle_suggestion("Casual", "Office") == "Professional bun or neat ponytail"

    def test_style_fallback(self):
        assert generate_hairstyle_suggestion("Traditional", None) == "Classic updo or neat bun"

    def test_generic_default(self):
        assert generate_hairstyle_suggestion(None, "Beach") == DEFAULT_HAIRSTYLE


# =============================================================================
# select_outfit
# =============================================================================

class TestSelectOutfit:
    def test_top_and_bottom_with_shoes_and_accessories(self, wardrobe):
        selection = select_outfit(wardrobe, "Casual", rng=random.Random(7))

        categories = [i["category"] for i in selection.items]
        assert categories == ["Tops", "Bottoms"]
        assert selection.shoes is not None
        assert 1 <= len(selection.accessories) <= 2
        accessory_ids = [a["wardrobe_id"] for a in selection.accessories]
        assert len(set(accessory_ids)) == len(accessory_ids)
        assert set(accessory_ids) <= {8, 9, 10}

    def test_pair_is_color_compatible(self, wardrobe):
        colors = {i.id: i.color for i in wardrobe}
        for seed in range(25):
            selection = select_outfit(wardrobe, "Casual", rng=random.Random(seed))
            top, bottom = (colors[i["wardrobe_id"]] for i in selection.items)
            assert check_color_compatibility(top, bottom)

    def test_incompatible_pair_is_repaired(self):
        wardrobe = [
            item(1, "Tops", "red"),
            item(2, "Tops", "orange"),
            item(3, "Bottoms", "yellow"),
            item(4, "Bottoms", "blue"),
        ]
        # yellow matches neither top, blue complements both
        compatible = {(1, 4), (2, 4)}
        for seed in range(25):
            selection = select_outfit(wardrobe, "Casual", rng=random.Random(seed))
            ids = tuple(i["wardrobe_id"] for i in selection.items)
            assert ids in compatible

    def test_dress_for_wedding(self, wardrobe):
        selection = select_outfit(wardrobe, "Casual", "Wedding", rng=random.Random(1))
        assert [i["wardrobe_id"] for i in selection.items] == [5]
        assert selection.hairstyle_suggestion == "Elegant updo with accessories"

    def test_dress_for_elegant_style(self, wardrobe):
        selection = select_outfit(wardrobe, "Elegant", rng=random.Random(3))
        assert selection.items[0]["category"] == "Dresses"

    def test_dress_when_no_separates(self):
        selection = select_outfit([item(1, "Dresses", "red"), item(2, "Tops", "white")], "Casual",
                                  rng=random.Random(0))
        assert [i["wardrobe_id"] for i in selection.items] == [1]

    def test_shoes_prefer_style_match(self, wardrobe):
        for seed in range(10):
            selection = select_outfit(wardrobe, "Traditional", rng=random.Random(seed))
            assert selection.shoes["wardrobe_id"] == 6

    def test_shoes_fall_back_to_any_footwear(self):
        wardrobe = [item(1, "Tops"), item(2, "Bottoms"), item(3, "Footwear", tags=["sporty"])]
        selection = select_outfit(wardrobe, "Traditional", rng=random.Random(0))
        assert selection.shoes == {"wardrobe_id": 3, "image_url": "https://example.com/3.jpg"}

    def test_empty_categories(self):
        selection = select_outfit([item(1, "Accessories")], "Casual", rng=random.Random(0))
        assert selection.items == []
        assert selection.shoes is None
        assert [a["wardrobe_id"] for a in selection.accessories] == [1]

    def test_recently_worn_flagged_when_unavoidable(self):
        wardrobe = [item(1, "Tops", "white"), item(2, "Bottoms", "black")]
        selection = select_outfit(wardrobe, "Casual", recently_worn={frozenset({1, 2})}, rng=random.Random(0))
        assert selection.signature == frozenset({1, 2})
        assert selection.is_recently_worn is True

    def test_retry_avoids_recently_worn_pair(self):
        wardrobe = [item(1, "Tops", "white"), item(2, "Tops", "white"), item(3, "Bottoms", "black")]
        # First pick repeats the worn white top, the retry takes the other one
        rng = ScriptedRandom(picks=[1, 3, 2, 3])
        selection = select_outfit(wardrobe, "Casual", recently_worn={frozenset({1, 3})}, rng=rng)
        assert selection.signature == frozenset({2, 3})
        assert selection.is_recently_worn is False

    def test_not_flagged_for_fresh_outfit(self, wardrobe):
        selection = select_outfit(wardrobe, "Casual", recently_worn={frozenset({99})}, rng=random.Random(0))
        assert selection.is_recently_worn is False

    def test_to_dict(self, wardrobe):
        data = select_outfit(wardrobe, "Casual", rng=random.Random(2)).to_dict()
        assert set(data) == {"items", "shoes", "accessories", "hairstyle_suggestion", "is_recently_worn"}
