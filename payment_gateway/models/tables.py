"""SQLAlchemy models for the SQL-backed payment store."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentRow(Base):
    """
    A stored payment.

    Rows are insert-only; there is no update path. ``original_request`` keeps
    the inbound request as JSON so retries can be compared field by field.
    """

    __tablename__ = "payments"

    id = Column(String(36), primary_key=True)
    card_number = Column(String(19), nullable=False)
    expiry_month = Column(Integer, nullable=False)
    expiry_year = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    amount = Column(Integer, nullable=False)
    cvv = Column(String(4), nullable=False)
    status = Column(String(20), nullable=False)  # "Authorized", "Declined"
    original_request = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class IdempotencyKeyRow(Base):
    """Secondary index from a client idempotency token to the payment it produced."""

    __tablename__ = "idempotency_keys"

    token = Column(String(255), primary_key=True)
    payment_id = Column(String(36), ForeignKey("payments.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
