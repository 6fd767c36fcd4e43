"""
Google Calendar integration over the OAuth2 and Calendar v3 REST APIs.
"""
import logging
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests
from sqlalchemy.orm import Session

from ..config import settings
from ..core.exceptions import ConfigurationError, ExternalServiceError, ValidationError
from ..models import User, utcnow

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
CALENDAR_EVENTS_URL = "https://www.googleapis.com/calendar/v3/calendars/primary/events"

SCOPES = [
    "https://www.googleapis.com/auth/calendar.readonly",
    "https://www.googleapis.com/auth/calendar.events.readonly",
]

# Checked in order; first match wins
EVENT_PATTERNS = [
    ("office", re.compile(r"\b(meeting|office|work|conference|presentation|interview|client|business)\b")),
    ("party", re.compile(r"\b(party|celebration|birthday|anniversary|wedding|reception|dinner|night out)\b")),
    ("travel", re.compile(r"\b(travel|trip|vacation|flight|hotel|journey|tour)\b")),
    ("fitness", re.compile(r"\b(gym|workout|exercise|fitness|yoga|running|sports)\b")),
    ("casual", re.compile(r"\b(lunch|coffee|casual|hangout|friends)\b")),
]


def _require_oauth_config() -> None:
    missing = [
        name for name, value in (
            ("GOOGLE_CALENDAR_CLIENT_ID", settings.GOOGLE_CALENDAR_CLIENT_ID),
            ("GOOGLE_CALENDAR_CLIENT_SECRET", settings.GOOGLE_CALENDAR_CLIENT_SECRET),
            ("GOOGLE_CALENDAR_REDIRECT_URI", settings.GOOGLE_CALENDAR_REDIRECT_URI),
        ) if not value
    ]
    if missing:
        raise ConfigurationError("Google Calendar OAuth", missing)


def categorize_event(title: Optional[str], description: Optional[str] = None) -> str:
    if not title:
        return "other"
    combined = f"{title.lower()} {(description or '').lower()}"
    for event_type, pattern in EVENT_PATTERNS:
        if pattern.search(combined):
            return event_type
    return "other"


def get_auth_url(user_id: int) -> str:
    _require_oauth_config()
    params = {
        "client_id": settings.GOOGLE_CALENDAR_CLIENT_ID,
        "redirect_uri": settings.GOOGLE_CALENDAR_REDIRECT_URI,
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "access_type": "offline",
        "state": str(user_id),
        "prompt": "consent",  # forces a refresh token on every connect
    }
    logger.info(f"Generated calendar auth URL for user: {user_id}")
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


def _token_request(data: dict) -> Dict[str, Any]:
    try:
        response = requests.post(GOOGLE_TOKEN_URL, data=data, timeout=settings.HTTP_TIMEOUT)
    except requests.RequestException as e:
        logger.error(f"Google token request failed: {e}")
        raise ExternalServiceError("Google OAuth", str(e))

    if response.status_code != 200:
        logger.error(f"Google token error: {response.status_code} {response.text}")
        try:
            detail = response.json().get("error_description") or response.json().get("error")
        except ValueError:
            detail = response.text
        raise ExternalServiceError("Google OAuth", detail or f"HTTP {response.status_code}")
    return response.json()


def exchange_code_for_tokens(code: str) -> Dict[str, Any]:
    _require_oauth_config()
    if not code:
        raise ValidationError("Authorization code is required", field="code")
    return _token_request({
        "code": code,
        "client_id": settings.GOOGLE_CALENDAR_CLIENT_ID,
        "client_secret": settings.GOOGLE_CALENDAR_CLIENT_SECRET,
        "redirect_uri": settings.GOOGLE_CALENDAR_REDIRECT_URI,
        "grant_type": "authorization_code",
    })


def _expiry_from(tokens: dict) -> Optional[datetime]:
    if tokens.get("expires_in"):
        return utcnow() + timedelta(seconds=int(tokens["expires_in"]))
    if tokens.get("expiry_date"):
        return datetime.fromtimestamp(int(tokens["expiry_date"]) / 1000, timezone.utc).replace(tzinfo=None)
    return None


def save_calendar_tokens(db: Session, user: User, tokens: Dict[str, Any]) -> User:
    user.calendar_access_token = tokens.get("access_token")
    # Google only returns a refresh token on consent; keep the old one otherwise
    if tokens.get("refresh_token"):
        user.calendar_refresh_token = tokens["refresh_token"]
    user.calendar_token_expiry = _expiry_from(tokens)
    user.calendar_connected = True
    db.commit()
    db.refresh(user)
    return user


def _refresh_access_token(db: Session, user: User) -> None:
    if not user.calendar_refresh_token:
        raise ValidationError("Google Calendar session expired, please reconnect")
    _require_oauth_config()
    tokens = _token_request({
        "refresh_token": user.calendar_refresh_token,
        "client_id": settings.GOOGLE_CALENDAR_CLIENT_ID,
        "client_secret": settings.GOOGLE_CALENDAR_CLIENT_SECRET,
        "grant_type": "refresh_token",
    })
    save_calendar_tokens(db, user, tokens)
    logger.info(f"Refreshed calendar token for user {user.id}")


def _valid_access_token(db: Session, user: User) -> str:
    if not user.calendar_connected or not user.calendar_access_token:
        raise ValidationError("Google Calendar not connected")
    if user.calendar_token_expiry and utcnow() >= user.calendar_token_expiry:
        _refresh_access_token(db, user)
    return user.calendar_access_token


def _rfc3339(value: datetime) -> str:
    return value.replace(microsecond=0).isoformat() + "Z"


def _parse_event(event: dict) -> Dict[str, Any]:
    start = event.get("start") or {}
    end = event.get("end") or {}
    return {
        "id": event.get("id"),
        "title": event.get("summary") or "Untitled Event",
        "description": event.get("description") or "",
        "start": start.get("dateTime") or start.get("date"),
        "end": end.get("dateTime") or end.get("date"),
        "location": event.get("location") or "",
        "type": categorize_event(event.get("summary"), event.get("description")),
    }


def get_calendar_events(db: Session, user: User, start: datetime, end: datetime) -> List[Dict[str, Any]]:
    token = _valid_access_token(db, user)
    try:
        response = requests.get(
            CALENDAR_EVENTS_URL,
            headers={"Authorization": f"Bearer {token}"},
            params={
                "timeMin": _rfc3339(start),
                "timeMax": _rfc3339(end),
                "singleEvents": "true",
                "orderBy": "startTime",
                "maxResults": 50,
            },
            timeout=settings.HTTP_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"Calendar events request failed: {e}")
        raise ExternalServiceError("Google Calendar", f"Failed to fetch calendar events: {e}")

    if response.status_code != 200:
        logger.error(f"Calendar API error: {response.status_code} {response.text}")
        raise ExternalServiceError("Google Calendar", f"Failed to fetch calendar events: HTTP {response.status_code}")

    return [_parse_event(e) for e in response.json().get("items", [])]


def get_todays_events(db: Session, user: User) -> List[Dict[str, Any]]:
    start = datetime.combine(utcnow().date(), time.min)
    return get_calendar_events(db, user, start, start + timedelta(days=1))


def get_week_events(db: Session, user: User, week_start: date) -> List[Dict[str, Any]]:
    start = datetime.combine(week_start, time.min)
    return get_calendar_events(db, user, start, start + timedelta(days=7))


def disconnect_calendar(db: Session, user: User) -> User:
    user.calendar_access_token = None
    user.calendar_refresh_token = None
    user.calendar_token_expiry = None
    user.calendar_connected = False
    db.commit()
    return user


def is_calendar_connected(user: Optional[User]) -> bool:
    return bool(user and user.calendar_connected)
