"""
Google Calendar connection routes.

/callback is opened by the browser after Google consent, so it is public and
answers with small HTML pages instead of JSON.
"""
import logging
from datetime import date
from html import escape
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import StyloAIException, ValidationError
from ..database import get_db
from ..models import User
from ..schemas import ExchangeCodeRequest
from ..services.calendar_service import (
    disconnect_calendar,
    exchange_code_for_tokens,
    get_auth_url,
    get_todays_events,
    get_week_events,
    is_calendar_connected,
    save_calendar_tokens,
)
from ..utils.auth import require_premium

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{title}</title>
  <style>
    body {{
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      display: flex;
      justify-content: center;
      align-items: center;
      min-height: 100vh;
      margin: 0;
      background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    }}
    .container {{
      background: white;
      padding: 40px;
      border-radius: 20px;
      box-shadow: 0 20px 60px rgba(0, 0, 0, 0.3);
      text-align: center;
      max-width: 400px;
    }}
    .icon {{ font-size: 64px; margin-bottom: 20px; }}
    h1 {{ color: #333; margin-bottom: 10px; }}
    p {{ color: #666; line-height: 1.6; }}
    .note {{ font-size: 12px; color: #999; margin-top: 20px; }}
    .code-box, .error-details {{
      background: #f5f5f5;
      padding: 15px;
      border-radius: 10px;
      font-family: monospace;
      font-size: 12px;
      word-break: break-all;
      margin: 20px 0;
    }}
    .error-details {{ background: #fee; color: #c33; }}
    button {{
      background: #667eea;
      color: white;
      border: none;
      padding: 12px 30px;
      border-radius: 25px;
      font-size: 16px;
      cursor: pointer;
    }}
  </style>
</head>
<body>
  <div class="container">
    <div class="icon">{icon}</div>
    <h1>{heading}</h1>
{body}
  </div>
</body>
</html>
"""


def render_page(title: str, icon: str, heading: str, body: str) -> HTMLResponse:
    return HTMLResponse(PAGE_TEMPLATE.format(title=title, icon=icon, heading=heading, body=body))


def _code_page(heading: str, intro: str, code: str, note: str) -> HTMLResponse:
    safe_code = escape(code, quote=True)
    body = (
        f"    <p>{intro}</p>\n"
        f'    <div class="code-box" id="code">{safe_code}</div>\n'
        "    <button onclick=\"navigator.clipboard.writeText(document.getElementById('code').innerText)"
        ".then(() => alert('Copied!'))\">Copy Code</button>\n"
        f'    <p class="note">{note}</p>'
    )
    return render_page("Calendar Connection", "&#x1F4CB;", heading, body)


def _error_page(heading: str, intro: str, error: str, note: str) -> HTMLResponse:
    body = (
        f"    <p>{intro}</p>\n"
        f'    <div class="error-details">{escape(error)}</div>\n'
        f'    <p class="note">{note}</p>'
    )
    return render_page("Calendar Connection", "&#x274C;", heading, body)


@router.get("/callback", response_class=HTMLResponse, include_in_schema=False)
def oauth_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    if error:
        logger.info(f"Calendar OAuth denied: {error}")
        return render_page(
            "Calendar Connection", "&#x26A0;&#xFE0F;", "Connection Cancelled",
            "    <p>You cancelled the Google Calendar connection. You can close this page and try again from the app.</p>",
        )

    if not code:
        logger.error("No authorization code in calendar callback")
        return render_page(
            "Calendar Connection", "&#x26A0;&#xFE0F;", "Authorization Error",
            "    <p>No authorization code received. Please try again from the app.</p>",
        )

    user = None
    if state and state.isdigit():
        user = db.query(User).filter(User.id == int(state)).first()
    if user is None:
        logger.error(f"Calendar callback without a usable user id in state: {state!r}")
        return _code_page(
            "Authorization Code",
            "Copy this code and enter it in the StyloAI app:",
            code,
            "Go to Calendar Settings &rarr; Enter Authorization Code",
        )

    try:
        tokens = exchange_code_for_tokens(code)
    except StyloAIException as e:
        logger.error(f"Calendar token exchange failed for user {user.id}: {e.message}")
        return _code_page(
            "Connection Issue",
            "Please copy this code and enter it manually in the app:",
            code,
            f"Error: {escape(e.message)}",
        )

    try:
        save_calendar_tokens(db, user, tokens)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving calendar tokens for user {user.id}: {e}")
        return _error_page(
            "Connection Failed",
            "There was an error saving your calendar connection.",
            str(e) or "Unknown error",
            "Please try again from the app or contact support.",
        )

    logger.info(f"Calendar connected for user {user.id}")
    return render_page(
        "Calendar Connected", "&#x2705;", "Google Calendar Connected",
        "    <p>Your Google Calendar has been successfully connected to StyloAI!</p>\n"
        '    <p class="note">You can close this page and return to the app.<br>'
        "Your calendar events will now be used for outfit suggestions.</p>",
    )


@router.get("/auth-url")
def auth_url(current_user: User = Depends(require_premium)):
    return {"success": True, "data": {"auth_url": get_auth_url(current_user.id)}}


@router.post("/exchange-code")
def exchange_code(
    payload: ExchangeCodeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    """Manual fallback when the browser callback could not reach the app."""
    if not payload.code:
        raise ValidationError("Authorization code is required", field="code")

    tokens = exchange_code_for_tokens(payload.code.strip())
    save_calendar_tokens(db, current_user, tokens)
    logger.info(f"Calendar connected via manual code exchange for user {current_user.id}")
    return {"success": True, "message": "Google Calendar connected successfully"}


@router.get("/status")
def connection_status(current_user: User = Depends(require_premium)):
    return {"success": True, "data": {"is_connected": is_calendar_connected(current_user)}}


@router.get("/today")
def today_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    return {"success": True, "data": get_todays_events(db, current_user)}


@router.get("/week")
def week_events(
    week_start_date: Optional[date] = Query(None, description="First day of the week (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    if week_start_date is None:
        raise ValidationError("weekStartDate is required", field="week_start_date")
    return {"success": True, "data": get_week_events(db, current_user, week_start_date)}


@router.post("/disconnect")
def disconnect(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_premium),
):
    disconnect_calendar(db, current_user)
    return {"success": True, "message": "Google Calendar disconnected successfully"}
