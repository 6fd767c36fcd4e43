"""
Tests for style scoring and progress analytics.
"""
from datetime import timedelta

import pytest

from conftest import add_basic_wardrobe, create_user
from styloai.core.exceptions import NotFoundError
from styloai.models import utcnow
from styloai.services.outfit_generator import create_outfit
from styloai.services.style_history_service import (
    calculate_style_score,
    calculate_variance,
    generate_improvement_suggestions,
    get_style_history,
    get_style_progress,
    round_half_up,
    track_worn_outfit,
)


class TestStyleScore:
    def test_baseline(self):
        assert calculate_style_score(None, None) == 50
        assert calculate_style_score(3, "") == 50

    def test_rating_steps(self):
        assert calculate_style_score(5, None) == 70
        assert calculate_style_score(1, None) == 30

    def test_keywords(self):
        assert calculate_style_score(4, "Love it, so stylish") == 70
        assert calculate_style_score(3, "bad fit, wrong color") == 30

    def test_uncomfortable_counts_both_ways(self):
        # "uncomfortable" also contains "comfortable"
        assert calculate_style_score(3, "uncomfortable") == 45

    def test_clamped(self):
        assert calculate_style_score(5, "love great perfect amazing beautiful stylish comfortable") == 100
        assert calculate_style_score(1, "hate bad ugly wrong") == 0


class TestImprovementSuggestions:
    def test_low_rating(self):
        assert generate_improvement_suggestions(2, None) == [
            "Try experimenting with different color combinations",
            "Consider adding accessories to enhance your look",
        ]

    def test_feedback_topics(self):
        suggestions = generate_improvement_suggestions(4, "The colour was off and the size too big, no jewelry")
        assert suggestions == [
            "Explore color theory to find better combinations",
            "Ensure your clothes fit well for a polished look",
            "Accessories can elevate any outfit - try adding some",
        ]

    def test_default_encouragement(self):
        assert generate_improvement_suggestions(5, "nice") == [
            "Keep experimenting with different styles",
            "Take photos to track what works best for you",
        ]


def test_variance():
    assert calculate_variance([2, 4]) == 1
    assert calculate_variance([3, 3, 3]) == 0


# =============================================================================
# Tracking and progress
# =============================================================================

@pytest.fixture
def wardrobe_user(db_session):
    user = create_user(db_session)
    add_basic_wardrobe(db_session, user.id)
    return user


class TestTracking:
    def test_track_copies_occasion_and_scores(self, db_session, wardrobe_user):
        outfit = create_outfit(db_session, wardrobe_user.id, "Casual", "Office")
        entry = track_worn_outfit(db_session, wardrobe_user.id, outfit.id, rating=5, feedback="perfect")

        assert entry.occasion == "Office"
        assert entry.style_score == 75
        assert entry.worn_date is not None
        assert entry.photos == []

    def test_track_rejects_foreign_outfit(self, db_session, wardrobe_user):
        other = create_user(db_session, email="other@example.com")
        add_basic_wardrobe(db_session, other.id)
        outfit = create_outfit(db_session, other.id, "Casual")

        with pytest.raises(NotFoundError):
            track_worn_outfit(db_session, wardrobe_user.id, outfit.id)

    def test_history_newest_first_with_limit(self, db_session, wardrobe_user):
        outfit = create_outfit(db_session, wardrobe_user.id, "Casual")
        for days_ago in (3, 1, 2):
            track_worn_outfit(db_session, wardrobe_user.id, outfit.id, worn_date=utcnow() - timedelta(days=days_ago))

        history = get_style_history(db_session, wardrobe_user.id, limit=2)
        assert len(history) == 2
        assert history[0].worn_date > history[1].worn_date


class TestProgress:
    def test_empty(self, db_session, wardrobe_user):
        progress = get_style_progress(db_session, wardrobe_user.id)
        assert progress["total_outfits"] == 0
        assert progress["improvement_trend"] == "neutral"
        assert progress["recent_history"] == []

    def test_improving_trend_and_averages(self, db_session, wardrobe_user):
        office = create_outfit(db_session, wardrobe_user.id, "Casual", "Office")
        party = create_outfit(db_session, wardrobe_user.id, "Casual", "Party")
        now = utcnow()
        # Older five rated 2, newest five rated 5
        for i in range(10):
            rating = 5 if i < 5 else 2
            track_worn_outfit(
                db_session, wardrobe_user.id, office.id if i % 2 else party.id,
                worn_date=now - timedelta(days=i), rating=rating,
            )

        progress = get_style_progress(db_session, wardrobe_user.id)
        assert progress["total_outfits"] == 10
        assert progress["average_rating"] == 3.5
        assert progress["average_style_score"] == 55
        assert progress["improvement_trend"] == "improving"
        assert {o["occasion"] for o in progress["top_occasions"]} == {"Office", "Party"}
        assert len(progress["recent_history"]) == 10

        types = [r["type"] for r in progress["recommendations"]]
        assert "score" in types
        assert "variety" in types
        assert "rating" not in types

    def test_declining_trend(self, db_session, wardrobe_user):
        outfit = create_outfit(db_session, wardrobe_user.id, "Casual", "Daily")
        now = utcnow()
        for i in range(10):
            track_worn_outfit(db_session, wardrobe_user.id, outfit.id,
                              worn_date=now - timedelta(days=i), rating=1 if i < 5 else 5)

        progress = get_style_progress(db_session, wardrobe_user.id)
        assert progress["improvement_trend"] == "declining"
        assert progress["recommendations"][0]["type"] == "rating"

    def test_inconsistent_recent_ratings(self, db_session, wardrobe_user):
        outfit = create_outfit(db_session, wardrobe_user.id, "Casual", "Daily")
        now = utcnow()
        for i, rating in enumerate((5, 1, 5, 1)):
            track_worn_outfit(db_session, wardrobe_user.id, outfit.id,
                              worn_date=now - timedelta(days=i), rating=rating)

        types = [r["type"] for r in get_style_progress(db_session, wardrobe_user.id)["recommendations"]]
        assert "consistency" in types

    def test_averages_round_half_up(self, db_session, wardrobe_user):
        outfit = create_outfit(db_session, wardrobe_user.id, "Casual", "Daily")
        now = utcnow()
        # Style scores 60, 65, 60, 65
        looks = [(3, "love great"), (3, "love great perfect"), (3, "love great"), (4, "love")]
        for i, (rating, feedback) in enumerate(looks):
            track_worn_outfit(db_session, wardrobe_user.id, outfit.id,
                              worn_date=now - timedelta(days=i), rating=rating, feedback=feedback)

        progress = get_style_progress(db_session, wardrobe_user.id)
        assert progress["average_rating"] == 3.3
        assert progress["average_style_score"] == 63


def test_round_half_up():
    assert round_half_up(3.25, 1) == 3.3
    assert round_half_up(62.5) == 63
    assert round_half_up(2.5) == 3
    assert round_half_up(3.24, 1) == 3.2


def test_zero_score_counts_in_averages(db_session, wardrobe_user):
    outfit = create_outfit(db_session, wardrobe_user.id, "Casual", "Daily")
    now = utcnow()
    zero = track_worn_outfit(db_session, wardrobe_user.id, outfit.id, worn_date=now, rating=1, feedback="hate, bad, ugly")
    track_worn_outfit(db_session, wardrobe_user.id, outfit.id, worn_date=now - timedelta(days=1), rating=5)

    assert zero.style_score == 0
    assert get_style_progress(db_session, wardrobe_user.id)["average_style_score"] == 35
