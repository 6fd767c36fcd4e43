"""
Payment transaction model (maps PhonePe transactions back to users).
"""
from sqlalchemy import Column, ForeignKey, Integer, String

from .base import Base, TimestampMixin


class PaymentTransaction(TimestampMixin, Base):
    __tablename__ = "payment_transactions"

    id = Column(Integer, primary_key=True, index=True)
    merchant_transaction_id = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)  # rupees
    plan_type = Column(String(16), nullable=False)
    status = Column(String(32), default="PENDING", nullable=False)
