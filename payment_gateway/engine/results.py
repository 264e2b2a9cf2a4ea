"""
Return values of the orchestration engine.

Business outcomes (conflict, not found, provider failure, ...) travel back to
the caller as values with a closed ErrorKind, never as exceptions.
"""

from dataclasses import dataclass
from typing import Optional

from payment_gateway.models.enums import ErrorKind
from payment_gateway.models.payment import PaymentView


@dataclass(frozen=True)
class GatewayFailure:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class GatewayResult:
    """Either a payment view or a failure."""

    payment: Optional[PaymentView] = None
    error: Optional[GatewayFailure] = None
    replayed: bool = False  # True when served from the idempotency index

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payment: PaymentView, replayed: bool = False) -> "GatewayResult":
        return cls(payment=payment, replayed=replayed)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "GatewayResult":
        return cls(error=GatewayFailure(kind=kind, message=message))
