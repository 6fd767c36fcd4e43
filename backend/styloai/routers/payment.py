from typing import Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import CreateOrderRequest, PaymentCallbackRequest, VerifyPaymentRequest
from ..services.payment_service import (
    check_premium_status,
    create_payment_order,
    get_premium_plans,
    handle_payment_callback,
    verify_payment,
)
from ..utils.auth import get_current_user

router = APIRouter(prefix="/payment", tags=["Payments"])


@router.post("/callback")
def payment_callback(
    payload: PaymentCallbackRequest,
    x_verify: Optional[str] = Header(None, alias="X-VERIFY"),
    db: Session = Depends(get_db),
):
    """PhonePe server-to-server webhook (no user token)."""
    return handle_payment_callback(db, payload.response, x_verify)


@router.get("/plans")
def plans(current_user: User = Depends(get_current_user)):
    return {"success": True, "data": get_premium_plans()}


@router.get("/status")
def premium_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"success": True, "data": check_premium_status(db, current_user)}


@router.post("/create-order")
def create_order(
    payload: CreateOrderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = create_payment_order(db, current_user, payload.amount, payload.plan_type)
    return {"success": True, "data": order}


@router.post("/verify")
def verify(
    payload: VerifyPaymentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return verify_payment(db, current_user, payload.merchant_transaction_id or payload.transaction_id)
