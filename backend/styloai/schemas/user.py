"""
User-related schemas for authentication and profile management.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

Gender = Literal["Men", "Women", "Unisex"]
StyleGoal = Literal["Professional", "Casual", "Trendy", "Elegant", "Minimal"]


class UserCreate(BaseModel):
    """Schema for registering a new user"""
    email: EmailStr = Field(..., description="User email address")
    phone: Optional[str] = Field(None, max_length=32, description="Phone number (used for payments)")
    password: str = Field(..., min_length=6, max_length=128, description="Password (min 6 characters)")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class UserLogin(BaseModel):
    """Schema for user login (both fields checked in the handler)"""
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


class UserSummary(BaseModel):
    id: int
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """Public profile"""
    gender: Optional[str] = None
    style_goals: List[str] = []
    occasions: List[str] = []
    body_analysis: Optional[Dict[str, Any]] = None
    face_analysis: Optional[Dict[str, Any]] = None
    is_premium: bool = False
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: Dict[str, Any]


class ProfileSetup(BaseModel):
    """Onboarding answers"""
    gender: Optional[Gender] = None
    style_goals: List[StyleGoal] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list, description="Occasions the user dresses for, e.g. Office, Party")


class ProfileSetupResponse(BaseModel):
    message: str
    user: Dict[str, Any]
