"""
Password hashing, JWT issuing and the authentication dependencies.

Usage:
    @router.get("/protected")
    def endpoint(current_user: User = Depends(get_current_user)):
        ...

    @router.get("/premium-only")
    def endpoint(current_user: User = Depends(require_premium)):
        ...
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ..config import settings
from ..core.exceptions import AuthenticationError, PremiumRequiredError
from ..database import get_db
from ..models import User, utcnow

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Security scheme for OpenAPI docs
security = HTTPBearer(
    scheme_name="StyloAI JWT",
    description="Token returned by /api/auth/register or /api/auth/login",
    auto_error=False,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Verify a token and return its payload.

    Raises:
        AuthenticationError: expired, malformed or wrongly signed token
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {str(e)}")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if not credentials or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token subject")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthenticationError("User not found")
    return user


def expire_premium_if_needed(user: User, db: Session) -> bool:
    """Switch off a lapsed subscription. Returns whether premium is still active."""
    if user.is_premium and user.premium_expires_at and user.premium_expires_at < utcnow():
        logger.info(f"Premium expired for user {user.id}")
        user.is_premium = False
        db.commit()
    return bool(user.is_premium)


def require_premium(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    if not expire_premium_if_needed(current_user, db):
        raise PremiumRequiredError()
    return current_user
