"""
Tests for health, config check, weather, payments, the calendar callback and style history routes.
"""
from unittest.mock import MagicMock, patch

import pytest

from conftest import add_basic_wardrobe
from styloai.config import settings
from styloai.models import User
from styloai.services import calendar_service, payment_service


def fake_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = str(payload)
    return response


# =============================================================================
# Health / config
# =============================================================================

class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"message": "StyloAI API is running", "status": "ok"}

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/health"


class TestConfigCheck:
    def test_nothing_configured(self, client):
        data = client.get("/api/config/check").json()["data"]
        assert data["google_calendar"] == {
            "configured": False, "has_client_id": False, "has_client_secret": False, "has_redirect_uri": False,
        }
        assert data["phonepe"]["configured"] is False
        assert data["weather"]["configured"] is False
        assert data["aws"]["configured"] is False
        assert data["cloudinary"]["configured"] is False
        assert data["cloudinary"]["cloud_name"] is None

    def test_partial_google_config(self, client, monkeypatch):
        monkeypatch.setattr(settings, "GOOGLE_CALENDAR_CLIENT_ID", "client-id")
        data = client.get("/api/config/check").json()["data"]["google_calendar"]
        assert data["has_client_id"] is True
        assert data["configured"] is False


# =============================================================================
# Weather
# =============================================================================

class TestWeather:
    def test_default_weather_without_key(self, client, auth_headers):
        response = client.get("/api/weather", params={"city": "Mumbai"}, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["weather"]["condition"] == "sunny"
        assert data["weather"]["temperature"] == 25
        assert data["recommendations"]["suggestions"]

    def test_coordinates(self, client, auth_headers):
        response = client.get("/api/weather", params={"lat": 19.07, "lon": 72.87}, headers=auth_headers)
        assert response.status_code == 200

    def test_location_required(self, client, auth_headers):
        response = client.get("/api/weather", params={"lat": 19.07}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "city or lat and lon are required"

    def test_requires_auth(self, client):
        assert client.get("/api/weather", params={"city": "Mumbai"}).status_code == 401


# =============================================================================
# Payments
# =============================================================================

@pytest.fixture
def phonepe(monkeypatch):
    monkeypatch.setattr(settings, "PHONEPE_MERCHANT_ID", "MERCHANT")
    monkeypatch.setattr(settings, "PHONEPE_SALT_KEY", "salt")
    monkeypatch.setattr(settings, "PHONEPE_SALT_INDEX", "1")


class TestPayment:
    def test_plans(self, client, auth_headers):
        plans = client.get("/api/payment/plans", headers=auth_headers).json()["data"]
        assert [p["id"] for p in plans] == ["monthly", "yearly"]

    def test_plans_require_auth(self, client):
        assert client.get("/api/payment/plans").status_code == 401

    def test_status(self, client, auth_headers):
        data = client.get("/api/payment/status", headers=auth_headers).json()["data"]
        assert data["is_premium"] is False
        assert data["days_remaining"] == 0

    def test_premium_status(self, client, premium_headers):
        data = client.get("/api/payment/status", headers=premium_headers).json()["data"]
        assert data["is_premium"] is True
        assert data["days_remaining"] == 30

    def test_create_order_not_configured(self, client, auth_headers):
        response = client.post("/api/payment/create-order", headers=auth_headers,
                               json={"amount": 299, "plan_type": "monthly"})
        assert response.status_code == 503
        assert response.json()["error_code"] == "NOT_CONFIGURED"

    def test_create_order(self, client, auth_headers, phonepe):
        reply = {"success": True, "data": {"instrumentResponse": {"redirectInfo": {"url": "https://pay.test/abc"}}}}
        with patch.object(payment_service.requests, "post", return_value=fake_response(200, reply)):
            response = client.post("/api/payment/create-order", headers=auth_headers,
                                   json={"amount": 2499, "plan_type": "yearly"})
        assert response.status_code == 200
        assert response.json()["data"]["payment_url"] == "https://pay.test/abc"

    def test_create_order_rejects_wrong_amount(self, client, auth_headers, phonepe):
        response = client.post("/api/payment/create-order", headers=auth_headers,
                               json={"amount": 1, "plan_type": "yearly"})
        assert response.status_code == 400
        assert response.json()["message"] == "Amount does not match the yearly plan price"

    def test_verify_accepts_either_id(self, client, auth_headers, phonepe):
        reply = {"success": True, "data": {"code": "PAYMENT_SUCCESS", "state": "COMPLETED", "amount": 29900}}
        with patch.object(payment_service.requests, "get", return_value=fake_response(200, reply)) as mock_get:
            response = client.post("/api/payment/verify", headers=auth_headers, json={"transaction_id": "TXN42"})
        assert response.json()["success"] is True
        assert mock_get.call_args.args[0].endswith("/pg/v1/status/MERCHANT/TXN42")

    def test_callback_bad_checksum(self, client, phonepe):
        response = client.post("/api/payment/callback", json={"response": "e30="}, headers={"X-VERIFY": "bad###1"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid checksum"

    def test_callback_missing_checksum(self, client, phonepe):
        response = client.post("/api/payment/callback", json={"response": "e30="})
        assert response.status_code == 400


# =============================================================================
# Calendar
# =============================================================================

@pytest.fixture
def google_config(monkeypatch):
    monkeypatch.setattr(settings, "GOOGLE_CALENDAR_CLIENT_ID", "client-id")
    monkeypatch.setattr(settings, "GOOGLE_CALENDAR_CLIENT_SECRET", "client-secret")
    monkeypatch.setattr(settings, "GOOGLE_CALENDAR_REDIRECT_URI", "http://localhost:5001/api/calendar/callback")


class TestCalendarCallback:
    def test_cancelled(self, client):
        response = client.get("/api/calendar/callback", params={"error": "access_denied"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Connection Cancelled" in response.text

    def test_missing_code(self, client):
        assert "Authorization Error" in client.get("/api/calendar/callback").text

    def test_unknown_user_shows_code_escaped(self, client):
        response = client.get("/api/calendar/callback", params={"code": "4/<abc>", "state": "not-a-user"})
        assert "Authorization Code" in response.text
        assert "4/&lt;abc&gt;" in response.text
        assert "4/<abc>" not in response.text

    def test_exchange_failure_shows_code(self, client, premium_user):
        # No OAuth configuration, so the exchange fails
        response = client.get("/api/calendar/callback", params={"code": "4/xyz", "state": str(premium_user.id)})
        assert "Connection Issue" in response.text
        assert "4/xyz" in response.text

    def test_success(self, client, premium_user, premium_headers, db_session, google_config):
        tokens = {"access_token": "a1", "refresh_token": "r1", "expires_in": 3600}
        with patch.object(calendar_service.requests, "post", return_value=fake_response(200, tokens)):
            response = client.get("/api/calendar/callback", params={"code": "4/xyz", "state": str(premium_user.id)})

        assert "Google Calendar Connected" in response.text
        db_session.refresh(premium_user)
        assert premium_user.calendar_refresh_token == "r1"

        status = client.get("/api/calendar/status", headers=premium_headers).json()
        assert status["data"]["is_connected"] is True


class TestCalendarApi:
    def test_auth_url_not_configured(self, client, premium_headers):
        response = client.get("/api/calendar/auth-url", headers=premium_headers)
        assert response.status_code == 503

    def test_auth_url(self, client, premium_headers, google_config):
        url = client.get("/api/calendar/auth-url", headers=premium_headers).json()["data"]["auth_url"]
        assert url.startswith("https://accounts.google.com/")

    def test_exchange_code_and_disconnect(self, client, premium_headers, premium_user, db_session, google_config):
        assert client.post("/api/calendar/exchange-code", headers=premium_headers, json={}).status_code == 400

        tokens = {"access_token": "a1", "refresh_token": "r1", "expires_in": 3600}
        with patch.object(calendar_service.requests, "post", return_value=fake_response(200, tokens)):
            response = client.post("/api/calendar/exchange-code", headers=premium_headers, json={"code": " 4/xyz "})
        assert response.json()["message"] == "Google Calendar connected successfully"

        disconnected = client.post("/api/calendar/disconnect", headers=premium_headers)
        assert disconnected.json()["message"] == "Google Calendar disconnected successfully"
        user = db_session.query(User).filter(User.id == premium_user.id).one()
        db_session.refresh(user)
        assert user.calendar_connected is False

    def test_week_requires_start(self, client, premium_headers):
        assert client.get("/api/calendar/week", headers=premium_headers).status_code == 400


# =============================================================================
# Style history
# =============================================================================

class TestStyleHistoryApi:
    def test_track_history_progress(self, client, auth_headers, user, db_session):
        add_basic_wardrobe(db_session, user.id)
        outfit = client.post("/api/outfits/generate", headers=auth_headers,
                             json={"style_type": "Casual", "occasion": "Party"}).json()["outfit"]

        tracked = client.post("/api/style-history/track", headers=auth_headers, json={
            "outfit_id": outfit["id"],
            "rating": 5,
            "feedback": "Love it, perfect fit",
            "photos": [{"image_url": "http://localhost:5001/uploads/look.jpg"}],
        })
        assert tracked.status_code == 200
        assert tracked.json()["message"] == "Outfit tracked"
        entry = tracked.json()["data"]
        assert entry["occasion"] == "Party"
        assert entry["style_score"] == 80
        assert entry["photos"][0]["cloudinary_public_id"] is None

        history = client.get("/api/style-history/history", headers=auth_headers).json()["data"]
        assert [h["id"] for h in history] == [entry["id"]]

        progress = client.get("/api/style-history/progress", headers=auth_headers).json()["data"]
        assert progress["total_outfits"] == 1
        assert progress["average_rating"] == 5
        assert progress["top_occasions"] == [{"occasion": "Party", "count": 1}]

    def test_outfit_id_required(self, client, auth_headers):
        response = client.post("/api/style-history/track", headers=auth_headers, json={"rating": 3})
        assert response.status_code == 400
        assert response.json()["message"] == "outfitId is required"

    def test_history_limit_bounds(self, client, auth_headers):
        assert client.get("/api/style-history/history", params={"limit": 0}, headers=auth_headers).status_code == 422

    def test_empty_progress(self, client, auth_headers):
        progress = client.get("/api/style-history/progress", headers=auth_headers).json()["data"]
        assert progress["total_outfits"] == 0
        assert progress["improvement_trend"] == "neutral"
