"""
User model.
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text

from .base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """Registered user with onboarding preferences and integrations state"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(32), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    gender = Column(String(16), nullable=True)  # Men | Women | Unisex
    style_goals = Column(JSON, default=list, nullable=False)
    occasions = Column(JSON, default=list, nullable=False)

    # {"image_url", "analysis_data", "uploaded_at"}
    body_analysis = Column(JSON, nullable=True)
    face_analysis = Column(JSON, nullable=True)

    is_premium = Column(Boolean, default=False, nullable=False)
    premium_activated_at = Column(DateTime, nullable=True)
    premium_expires_at = Column(DateTime, nullable=True)

    # Google Calendar OAuth tokens
    calendar_access_token = Column(Text, nullable=True)
    calendar_refresh_token = Column(Text, nullable=True)
    calendar_token_expiry = Column(DateTime, nullable=True)
    calendar_connected = Column(Boolean, default=False, nullable=False)

    def to_public_dict(self):
        """Profile fields safe to return to the client"""
        return {
            "id": self.id,
            "email": self.email,
            "phone": self.phone,
            "gender": self.gender,
            "style_goals": self.style_goals or [],
            "occasions": self.occasions or [],
        }
