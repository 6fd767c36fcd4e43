"""
Weekly planner models.
"""
from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin


class PlannerEntry(Base):
    """A single planned day inside a weekly plan"""
    __tablename__ = "planner_entries"

    id = Column(Integer, primary_key=True, index=True)
    planner_id = Column(Integer, ForeignKey("planners.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    outfit_id = Column(Integer, ForeignKey("outfits.id", ondelete="SET NULL"), nullable=True)
    occasion = Column(String(32), nullable=True)
    weather = Column(JSON, nullable=True)  # {"temperature", "condition"}
    is_confirmed = Column(Boolean, default=False, nullable=False)
    is_recently_worn = Column(Boolean, default=False, nullable=False)

    outfit = relationship("Outfit")


class Planner(TimestampMixin, Base):
    __tablename__ = "planners"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_start_date = Column(Date, nullable=False, index=True)
    week_end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    entries = relationship(
        "PlannerEntry",
        cascade="all, delete-orphan",
        order_by=PlannerEntry.date,
    )
