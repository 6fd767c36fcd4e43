"""
PhonePe payments for the premium subscription.

Every PhonePe request is signed with an X-VERIFY header:
    sha256(<body or ''> + <api path> + salt_key) + '###' + salt_index
"""
import base64
import binascii
import hashlib
import hmac
import json
import logging
import math
import secrets
import time
from datetime import timedelta
from typing import Any, Dict, List, Optional

import requests
from sqlalchemy.orm import Session

from ..config import settings
from ..core.exceptions import ConfigurationError, ExternalServiceError, NotFoundError, ValidationError
from ..models import PaymentTransaction, User, utcnow
from ..utils.auth import expire_premium_if_needed

logger = logging.getLogger(__name__)

PAY_PATH = "/pg/v1/pay"
WEBHOOK_PATH = "/pg/v1/webhook"

PREMIUM_PLANS: List[Dict[str, Any]] = [
    {
        "id": "monthly",
        "name": "Monthly Premium",
        "duration": "1 month",
        "price": 299,
        "features": [
            "Daily outfit suggestions",
            "Weekly planner",
            "Occasion styling",
            "Wardrobe gap detection",
            "Style history tracking",
        ],
    },
    {
        "id": "yearly",
        "name": "Yearly Premium",
        "duration": "12 months",
        "price": 2499,
        "original_price": 3588,
        "discount": "30% OFF",
        "features": [
            "All monthly features",
            "Priority support",
            "Advanced AI recommendations",
            "Early access to new features",
        ],
    },
]


def get_premium_plans() -> List[Dict[str, Any]]:
    return PREMIUM_PLANS


def compute_x_verify(body: str, path: str) -> str:
    digest = hashlib.sha256(f"{body}{path}{settings.PHONEPE_SALT_KEY}".encode("utf-8")).hexdigest()
    return f"{digest}###{settings.PHONEPE_SALT_INDEX}"


def _require_phonepe() -> None:
    missing = [
        name for name, value in (
            ("PHONEPE_MERCHANT_ID", settings.PHONEPE_MERCHANT_ID),
            ("PHONEPE_SALT_KEY", settings.PHONEPE_SALT_KEY),
        ) if not value
    ]
    if missing:
        raise ConfigurationError("PhonePe", missing)


def generate_transaction_id() -> str:
    return f"TXN{int(time.time() * 1000)}{secrets.token_hex(5)}"


def activate_premium(db: Session, user: User) -> User:
    now = utcnow()
    user.is_premium = True
    user.premium_activated_at = now
    user.premium_expires_at = now + timedelta(days=settings.PREMIUM_DURATION_DAYS)
    db.commit()
    db.refresh(user)
    logger.info(f"Premium activated for user {user.id} until {user.premium_expires_at}")
    return user


def create_payment_order(db: Session, user: User, amount: Optional[int], plan_type: Optional[str]) -> Dict[str, Any]:
    if not amount or not plan_type:
        raise ValidationError("Amount and planType are required")
    plan = next((p for p in PREMIUM_PLANS if p["id"] == plan_type), None)
    if plan is None:
        raise ValidationError("plan_type must be one of: monthly, yearly", field="plan_type")
    if amount != plan["price"]:
        raise ValidationError(f"Amount does not match the {plan_type} plan price", field="amount")
    _require_phonepe()

    transaction_id = generate_transaction_id()
    payload = {
        "merchantId": settings.PHONEPE_MERCHANT_ID,
        "merchantTransactionId": transaction_id,
        "merchantUserId": str(user.id),
        "amount": amount * 100,  # paise
        "redirectUrl": f"{settings.FRONTEND_URL}/payment/callback",
        "redirectMode": "POST",
        "callbackUrl": f"{settings.BACKEND_URL}/api/payment/callback",
        "mobileNumber": user.phone or "",
        "paymentInstrument": {"type": "PAY_PAGE"},
    }
    encoded = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")

    try:
        response = requests.post(
            f"{settings.PHONEPE_BASE_URL}{PAY_PATH}",
            json={"request": encoded},
            headers={
                "Content-Type": "application/json",
                "X-VERIFY": compute_x_verify(encoded, PAY_PATH),
                "Accept": "application/json",
            },
            timeout=settings.HTTP_TIMEOUT,
        )
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"PhonePe payment error: {e}")
        raise ExternalServiceError("PhonePe", "Failed to create payment order")

    if not data.get("success"):
        logger.error(f"PhonePe payment error: {response.status_code} {data}")
        raise ExternalServiceError("PhonePe", data.get("message") or "Failed to create payment order")

    try:
        payment_url = data["data"]["instrumentResponse"]["redirectInfo"]["url"]
    except (KeyError, TypeError):
        logger.error(f"Unexpected PhonePe pay response: {data}")
        raise ExternalServiceError("PhonePe", "Payment order creation failed")

    db.add(PaymentTransaction(
        merchant_transaction_id=transaction_id,
        user_id=user.id,
        amount=amount,
        plan_type=plan_type,
        status="PENDING",
    ))
    db.commit()

    return {
        "payment_url": payment_url,
        "transaction_id": transaction_id,
        "merchant_transaction_id": transaction_id,
    }


def verify_payment(db: Session, user: User, merchant_transaction_id: Optional[str]) -> Dict[str, Any]:
    if not merchant_transaction_id:
        raise ValidationError("Transaction ID is required", field="merchant_transaction_id")
    _require_phonepe()

    transaction = (
        db.query(PaymentTransaction)
        .filter(PaymentTransaction.merchant_transaction_id == merchant_transaction_id)
        .first()
    )
    if transaction is not None and transaction.user_id != user.id:
        raise NotFoundError("Transaction", merchant_transaction_id)

    status_path = f"/pg/v1/status/{settings.PHONEPE_MERCHANT_ID}/{merchant_transaction_id}"
    try:
        response = requests.get(
            f"{settings.PHONEPE_BASE_URL}{status_path}",
            headers={
                "Content-Type": "application/json",
                "X-VERIFY": compute_x_verify("", status_path),
                "X-MERCHANT-ID": settings.PHONEPE_MERCHANT_ID,
                "Accept": "application/json",
            },
            timeout=settings.HTTP_TIMEOUT,
        )
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Payment verification error: {e}")
        raise ExternalServiceError("PhonePe", "Failed to verify payment")

    if not data.get("success"):
        logger.error(f"Payment verification error: {response.status_code} {data}")
        raise ExternalServiceError("PhonePe", data.get("message") or "Payment verification failed")

    payment = data.get("data") or {}
    code, state = payment.get("code"), payment.get("state")
    if transaction is not None:
        transaction.status = state or code or transaction.status

    if code == "PAYMENT_SUCCESS" and state == "COMPLETED":
        activate_premium(db, user)
        return {
            "success": True,
            "message": "Payment successful. Premium activated!",
            "data": {
                "transaction_id": merchant_transaction_id,
                "amount": (payment.get("amount") or 0) / 100,
                "premium_status": True,
            },
        }

    db.commit()
    return {
        "success": False,
        "message": "Payment failed or pending",
        "data": {"code": code, "state": state},
    }


def handle_payment_callback(db: Session, encoded_response: Optional[str], x_verify: Optional[str]) -> Dict[str, Any]:
    if not encoded_response:
        raise ValidationError("response is required", field="response")
    _require_phonepe()

    expected = compute_x_verify(encoded_response, WEBHOOK_PATH)
    if not x_verify or not hmac.compare_digest(x_verify, expected):
        logger.warning("PhonePe webhook rejected: invalid checksum")
        raise ValidationError("Invalid checksum")

    try:
        body = json.loads(base64.b64decode(encoded_response).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise ValidationError("Malformed webhook payload")

    code = body.get("code")
    data = body.get("data") or {}
    merchant_transaction_id = data.get("merchantTransactionId")

    transaction = None
    if merchant_transaction_id:
        transaction = (
            db.query(PaymentTransaction)
            .filter(PaymentTransaction.merchant_transaction_id == merchant_transaction_id)
            .first()
        )
    user_id = transaction.user_id if transaction is not None else data.get("merchantUserId")

    if transaction is not None:
        transaction.status = data.get("state") or code or transaction.status
        db.commit()

    if code == "PAYMENT_SUCCESS" and data.get("state") == "COMPLETED":
        user = None
        if user_id is not None:
            try:
                user = db.query(User).filter(User.id == int(user_id)).first()
            except (TypeError, ValueError):
                user = None
        if user is not None:
            activate_premium(db, user)
        else:
            logger.warning(f"Webhook for unknown user, transaction {merchant_transaction_id}")
        return {"success": True, "message": "Webhook processed successfully"}

    return {"success": True, "message": "Webhook received"}


def check_premium_status(db: Session, user: User) -> Dict[str, Any]:
    expire_premium_if_needed(user, db)
    days_remaining = 0
    if user.premium_expires_at:
        seconds = (user.premium_expires_at - utcnow()).total_seconds()
        days_remaining = max(0, math.ceil(seconds / 86400))
    return {
        "is_premium": bool(user.is_premium),
        "premium_activated_at": user.premium_activated_at,
        "premium_expires_at": user.premium_expires_at,
        "days_remaining": days_remaining,
    }
