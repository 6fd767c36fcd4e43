"""
Pytest configuration and shared fixtures for the StyloAI backend tests.

The environment is pinned before the application is imported: in-memory
SQLite, no rate limiting, local uploads in a temp dir and no integrations.
"""
import os
import tempfile
from datetime import timedelta
from typing import Generator, List, Optional

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["USE_CLOUDINARY"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="styloai-uploads-")
os.environ["REDIS_URL"] = ""
for _name in (
    "CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET",
    "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY",
    "GOOGLE_CALENDAR_CLIENT_ID", "GOOGLE_CALENDAR_CLIENT_SECRET", "GOOGLE_CALENDAR_REDIRECT_URI",
    "PHONEPE_MERCHANT_ID", "PHONEPE_SALT_KEY",
    "OPENWEATHERMAP_API_KEY",
):
    os.environ[_name] = ""

import pytest
from fastapi.testclient import TestClient

from styloai.database import Base, SessionLocal, engine, init_db
from styloai.main import app
from styloai.models import User, WardrobeItem, utcnow
from styloai.utils.auth import create_access_token, get_password_hash
from styloai.utils.cache import clear_all_caches


# ============================================================================
# Database / client
# ============================================================================

@pytest.fixture(autouse=True)
def reset_database() -> Generator[None, None, None]:
    """Fresh schema and empty caches for every test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    clear_all_caches()
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


# ============================================================================
# Factories
# ============================================================================

def create_user(db, email: str = "user@example.com", password: str = "secret123",
                premium: bool = False, **fields) -> User:
    user = User(
        email=email,
        phone=fields.pop("phone", "9999999999"),
        hashed_password=get_password_hash(password),
        style_goals=fields.pop("style_goals", []),
        occasions=fields.pop("occasions", []),
        **fields,
    )
    if premium:
        user.is_premium = True
        user.premium_activated_at = utcnow()
        user.premium_expires_at = utcnow() + timedelta(days=30)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_item(db, user_id: int, category: str, color: str = "", style_tags: Optional[List[str]] = None) -> WardrobeItem:
    item = WardrobeItem(
        user_id=user_id,
        category=category,
        color=color,
        style_tags=style_tags or [],
        image_url=f"http://localhost:5001/uploads/{category.lower()}-{color or 'plain'}.jpg",
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def add_basic_wardrobe(db, user_id: int) -> List[WardrobeItem]:
    return [
        add_item(db, user_id, "Tops", "white", ["casual"]),
        add_item(db, user_id, "Tops", "blue", ["formal"]),
        add_item(db, user_id, "Bottoms", "black", ["casual"]),
        add_item(db, user_id, "Bottoms", "navy"),
        add_item(db, user_id, "Dresses", "red", ["elegant"]),
        add_item(db, user_id, "Footwear", "brown", ["casual"]),
        add_item(db, user_id, "Accessories", "gold"),
        add_item(db, user_id, "Accessories", "silver"),
    ]


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def user(db_session) -> User:
    return create_user(db_session)


@pytest.fixture
def premium_user(db_session) -> User:
    return create_user(db_session, email="premium@example.com", premium=True, occasions=["Office", "Party"])


@pytest.fixture
def auth_headers(user) -> dict:
    return bearer(user)


@pytest.fixture
def premium_headers(premium_user) -> dict:
    return bearer(premium_user)
