"""
Business pre-condition checks run before a payment reaches a bank.

Structural validation (field formats and ranges) belongs to the transport
layer. This module only checks what depends on the processing time: the card
must expire in a month strictly after the current one.
"""

from dataclasses import dataclass
from datetime import date


@dataclass
class ExpiryCheck:
    """Result of an expiry check."""

    valid: bool
    message: str = ""


def check_expiry(expiry_month: int, expiry_year: int, today: date) -> ExpiryCheck:
    """
    Check that a card's expiry lies strictly after ``today``'s month.

    A card expiring this month is rejected; one expiring next month is
    accepted.
    """
    if not 1 <= expiry_month <= 12:
        return ExpiryCheck(
            valid=False,
            message=f"Invalid expiry month: {expiry_month}",
        )

    if (expiry_year, expiry_month) <= (today.year, today.month):
        return ExpiryCheck(
            valid=False,
            message=f"Card expired or expiring this month: {expiry_month:02d}/{expiry_year}",
        )

    return ExpiryCheck(valid=True)
