"""
Payment and calendar request schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field


class CreateOrderRequest(BaseModel):
    amount: Optional[int] = Field(None, description="Plan price in rupees")
    plan_type: Optional[str] = Field(None, description="monthly or yearly")


class VerifyPaymentRequest(BaseModel):
    merchant_transaction_id: Optional[str] = None
    transaction_id: Optional[str] = None


class PaymentCallbackRequest(BaseModel):
    response: Optional[str] = Field(None, description="Base64 encoded PhonePe payload")


class ExchangeCodeRequest(BaseModel):
    code: Optional[str] = None
