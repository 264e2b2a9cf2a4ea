"""
Abstract bank integration interface.

Every acquiring backend (the bank simulator, the mock acquirer, real banks)
implements this interface. The orchestrator only ever talks to a
BankIntegration, never to a concrete client.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from payment_gateway.models.payment import PaymentRequest


@dataclass(frozen=True)
class AuthorizationRequest:
    """Normalized request sent to a bank. Carries no merchant-side identifiers."""

    card_number: str = field(repr=False)
    expiry_date: str  # "MM/YYYY"
    currency: str
    amount: int
    cvv: str = field(repr=False)

    @classmethod
    def from_payment_request(cls, request: PaymentRequest) -> "AuthorizationRequest":
        return cls(
            card_number=request.card_number,
            expiry_date=request.expiry_date,
            currency=request.currency,
            amount=request.amount,
            cvv=request.cvv,
        )

    @property
    def last_four(self) -> str:
        return self.card_number[-4:]

    def to_payload(self) -> dict[str, Any]:
        return {
            "card_number": self.card_number,
            "expiry_date": self.expiry_date,
            "currency": self.currency,
            "amount": self.amount,
            "cvv": self.cvv,
        }


@dataclass(frozen=True)
class AuthorizationOutcome:
    """The bank's decision for a single authorization attempt."""

    authorized: bool
    authorization_code: str = ""


class BankIntegration(ABC):
    """Abstract base class for acquiring-bank integrations."""

    @property
    @abstractmethod
    def provider_names(self) -> tuple[str, ...]:
        """Provider names this integration handles (e.g. ('SIMULATOR',))."""
        ...

    def supports(self, provider: str) -> bool:
        wanted = provider.upper()
        return any(name.upper() == wanted for name in self.provider_names)

    @abstractmethod
    async def authorize(self, request: AuthorizationRequest) -> AuthorizationOutcome:
        """
        Ask the bank to authorize a payment.

        Must not retry internally.

        Raises:
            ProviderUnavailableError: Backend unreachable, timed out or faulted.
            ProviderRejectedError: Backend reported the request as malformed.
        """
        ...
