"""
Immutable value types for payments.

Equality on these dataclasses is structural over every field. The idempotency
check compares a stored ``original_request`` with the incoming request, so a
difference in any single field (the provider selector included) makes two
requests different.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from payment_gateway.models.enums import PaymentStatus


@dataclass(frozen=True)
class PaymentRequest:
    """A merchant's request to charge a card."""

    card_number: str = field(repr=False)
    expiry_month: int
    expiry_year: int
    currency: str  # ISO 4217
    amount: int  # Minor units
    cvv: str = field(repr=False)
    provider: Optional[str] = None

    @property
    def expiry_date(self) -> str:
        return f"{self.expiry_month:02d}/{self.expiry_year}"


@dataclass(frozen=True)
class PaymentRecord:
    """
    The authoritative, stored result of one orchestration run.

    Created once after the bank has answered and never modified afterwards.
    """

    id: str
    card_number: str = field(repr=False)
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int
    cvv: str = field(repr=False)
    status: PaymentStatus
    original_request: PaymentRequest

    @classmethod
    def from_request(
        cls,
        request: PaymentRequest,
        status: PaymentStatus,
        payment_id: Optional[str] = None,
    ) -> "PaymentRecord":
        return cls(
            id=payment_id or str(uuid.uuid4()),
            card_number=request.card_number,
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=request.currency,
            amount=request.amount,
            cvv=request.cvv,
            status=status,
            original_request=request,
        )


@dataclass(frozen=True)
class PaymentView:
    """Externally safe view of a payment (masked card, no CVV)."""

    id: str
    status: PaymentStatus
    last_four_card_digits: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int
