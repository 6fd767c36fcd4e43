"""
Declarative base and shared column helpers.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime

from ..database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp (columns are stored without tzinfo)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


__all__ = ["Base", "TimestampMixin", "utcnow"]
