"""
Style history: worn outfits, feedback scoring and progress analytics.
"""
import logging
from collections import Counter
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError, ValidationError
from ..models import Outfit, StyleHistory, utcnow
from .outfit_generator import serialize_outfit

logger = logging.getLogger(__name__)

POSITIVE_KEYWORDS = ["love", "great", "perfect", "amazing", "beautiful", "stylish", "comfortable"]
NEGATIVE_KEYWORDS = ["hate", "bad", "ugly", "uncomfortable", "wrong"]


def calculate_style_score(rating: Optional[int], feedback: Optional[str]) -> int:
    """50 base, +/-10 per rating step from 3, +5 per positive and -10 per negative keyword, clamped."""
    score = 50
    if rating:
        score += (rating - 3) * 10

    if feedback:
        text = feedback.lower()
        # Substring match, so "uncomfortable" also counts as "comfortable"
        score += 5 * sum(1 for kw in POSITIVE_KEYWORDS if kw in text)
        score -= 10 * sum(1 for kw in NEGATIVE_KEYWORDS if kw in text)

    return max(0, min(100, score))


def generate_improvement_suggestions(rating: Optional[int], feedback: Optional[str]) -> List[str]:
    suggestions = []

    if not rating or rating < 3:
        suggestions.append("Try experimenting with different color combinations")
        suggestions.append("Consider adding accessories to enhance your look")

    if feedback:
        text = feedback.lower()
        if "color" in text or "colour" in text:
            suggestions.append("Explore color theory to find better combinations")
        if "fit" in text or "size" in text:
            suggestions.append("Ensure your clothes fit well for a polished look")
        if "accessory" in text or "jewelry" in text:
            suggestions.append("Accessories can elevate any outfit - try adding some")

    if not suggestions:
        suggestions.append("Keep experimenting with different styles")
        suggestions.append("Take photos to track what works best for you")

    return suggestions


def round_half_up(value: float, places: int = 0):
    """Round .5 away from zero, unlike the banker's rounding of round()"""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded) if places else int(rounded)


def calculate_variance(values: List[float]) -> float:
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def generate_recommendations(history: List[StyleHistory], average_rating: float,
                             average_style_score: float) -> List[Dict[str, str]]:
    recommendations = []

    if average_rating < 3.5:
        recommendations.append({
            "type": "rating",
            "message": "Your outfit ratings are below average. Try experimenting with different styles.",
            "priority": "high",
        })

    if average_style_score < 60:
        recommendations.append({
            "type": "score",
            "message": "Your style score can improve. Focus on color coordination and fit.",
            "priority": "high",
        })

    unique_occasions = {h.occasion for h in history if h.occasion}
    if len(unique_occasions) < 3 and len(history) > 5:
        recommendations.append({
            "type": "variety",
            "message": "Try exploring different occasions and styles for more variety.",
            "priority": "medium",
        })

    recent_ratings = [h.rating for h in history[:5] if h.rating]
    if recent_ratings and calculate_variance(recent_ratings) > 1.5:
        recommendations.append({
            "type": "consistency",
            "message": "Your outfit quality varies. Focus on consistent styling principles.",
            "priority": "medium",
        })

    return recommendations


def history_to_dict(entry: StyleHistory) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "outfit_id": entry.outfit_id,
        "outfit": serialize_outfit(entry.outfit),
        "worn_date": entry.worn_date,
        "occasion": entry.occasion,
        "rating": entry.rating,
        "feedback": entry.feedback,
        "photos": entry.photos or [],
        "style_score": entry.style_score,
        "improvement_suggestions": entry.improvement_suggestions or [],
        "created_at": entry.created_at,
    }


def track_worn_outfit(
    db: Session,
    user_id: int,
    outfit_id: int,
    worn_date: Optional[datetime] = None,
    rating: Optional[int] = None,
    feedback: Optional[str] = None,
    photos: Optional[List[dict]] = None,
) -> StyleHistory:
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError("rating must be between 1 and 5", field="rating")

    outfit = db.query(Outfit).filter(Outfit.id == outfit_id, Outfit.user_id == user_id).first()
    if not outfit:
        raise NotFoundError("Outfit", outfit_id)

    entry = StyleHistory(
        user_id=user_id,
        outfit_id=outfit.id,
        worn_date=worn_date or utcnow(),
        occasion=outfit.occasion,
        rating=rating,
        feedback=feedback,
        photos=photos or [],
        style_score=calculate_style_score(rating, feedback),
        improvement_suggestions=generate_improvement_suggestions(rating, feedback),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_style_history(db: Session, user_id: int, limit: int = 30) -> List[StyleHistory]:
    return (
        db.query(StyleHistory)
        .filter(StyleHistory.user_id == user_id)
        .order_by(StyleHistory.worn_date.desc(), StyleHistory.id.desc())
        .limit(limit)
        .all()
    )


def get_style_progress(db: Session, user_id: int) -> Dict[str, Any]:
    history = (
        db.query(StyleHistory)
        .filter(StyleHistory.user_id == user_id)
        .order_by(StyleHistory.worn_date.desc(), StyleHistory.id.desc())
        .all()
    )

    if not history:
        return {
            "total_outfits": 0,
            "average_rating": 0,
            "average_style_score": 0,
            "improvement_trend": "neutral",
            "top_occasions": [],
            "recommendations": [],
            "recent_history": [],
        }

    ratings = [h.rating for h in history if h.rating]
    scores = [h.style_score for h in history if h.style_score is not None]
    average_rating = sum(ratings) / len(ratings) if ratings else 0
    average_style_score = sum(scores) / len(scores) if scores else 0

    trend = "neutral"
    recent, older = scores[:5], scores[5:10]
    if recent and older:
        recent_avg = sum(recent) / len(recent)
        older_avg = sum(older) / len(older)
        if recent_avg > older_avg + 5:
            trend = "improving"
        elif recent_avg < older_avg - 5:
            trend = "declining"

    occasion_counts = Counter(h.occasion for h in history if h.occasion)
    top_occasions = [
        {"occasion": occasion, "count": count}
        for occasion, count in occasion_counts.most_common(5)
    ]

    return {
        "total_outfits": len(history),
        "average_rating": round_half_up(average_rating, 1),
        "average_style_score": round_half_up(average_style_score),
        "improvement_trend": trend,
        "top_occasions": top_occasions,
        "recommendations": generate_recommendations(history, average_rating, average_style_score),
        "recent_history": [history_to_dict(h) for h in history[:10]],
    }
