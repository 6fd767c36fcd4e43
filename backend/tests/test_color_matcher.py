"""
Tests for the color pairing rules.
"""
import pytest

from styloai.reco.color_matcher import check_color_compatibility, is_neutral, normalize_color


class TestNormalizeColor:
    def test_lowercases_and_strips(self):
        assert normalize_color("  Navy ") == "navy"

    def test_hex_maps_to_css_name(self):
        assert normalize_color("#FF0000") == "red"
        assert normalize_color("#000000") == "black"

    def test_unknown_hex_kept(self):
        assert normalize_color("#123457") == "#123457"

    def test_empty(self):
        assert normalize_color(None) == ""
        assert normalize_color("") == ""


class TestCompatibility:
    @pytest.mark.parametrize("pair", [(None, "red"), ("red", ""), ("", "")])
    def test_missing_color_is_compatible(self, pair):
        assert check_color_compatibility(*pair) is True

    @pytest.mark.parametrize("neutral", ["black", "white", "gray", "grey", "beige", "navy", "brown"])
    def test_neutrals_go_with_anything(self, neutral):
        assert check_color_compatibility(neutral, "purple")
        assert check_color_compatibility("orange", neutral)

    def test_same_color(self):
        assert check_color_compatibility("Red", "red")

    def test_complementary(self):
        assert check_color_compatibility("red", "green")
        assert check_color_compatibility("yellow", "purple")

    def test_analogous(self):
        assert check_color_compatibility("blue", "purple")
        assert check_color_compatibility("green", "yellow")

    def test_lookup_keyed_by_first_color(self):
        # pink lists blue, blue does not list pink
        assert check_color_compatibility("pink", "blue")
        assert not check_color_compatibility("blue", "pink")

    def test_clashing_colors(self):
        assert not check_color_compatibility("red", "yellow")
        assert not check_color_compatibility("orange", "pink")

    def test_hex_colors_are_matched_by_name(self):
        assert check_color_compatibility("#ff0000", "#008000")  # red / green
        assert check_color_compatibility("#ffffff", "orange")


def test_is_neutral():
    assert is_neutral("Beige")
    assert is_neutral("#000080")  # navy
    assert not is_neutral("red")
    assert not is_neutral(None)
