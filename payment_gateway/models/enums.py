"""Enumerations for the payment gateway domain model."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Terminal states of a stored payment."""

    AUTHORIZED = "Authorized"
    DECLINED = "Declined"


class ErrorKind(str, Enum):
    """Closed set of failures the gateway reports to its callers."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    IDEMPOTENCY_CONFLICT = "idempotency_conflict"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_REJECTED = "provider_rejected"
