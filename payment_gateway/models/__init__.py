from payment_gateway.models.enums import ErrorKind, PaymentStatus
from payment_gateway.models.payment import PaymentRecord, PaymentRequest, PaymentView

__all__ = [
    "ErrorKind",
    "PaymentStatus",
    "PaymentRecord",
    "PaymentRequest",
    "PaymentView",
]
