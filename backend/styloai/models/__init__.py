"""
Database models for StyloAI.

Import all models here for easy access and to ensure they are registered with SQLAlchemy.
"""
from .base import Base, utcnow
from .user import User
from .wardrobe import WardrobeItem
from .outfit import Outfit
from .daily_outfit import DailyOutfit
from .planner import Planner, PlannerEntry
from .wardrobe_gap import WardrobeGap
from .style_history import StyleHistory
from .payment import PaymentTransaction

__all__ = [
    "Base",
    "utcnow",
    "User",
    "WardrobeItem",
    "Outfit",
    "DailyOutfit",
    "Planner",
    "PlannerEntry",
    "WardrobeGap",
    "StyleHistory",
    "PaymentTransaction",
]
