"""Process-local payment store kept in two dicts."""

from typing import Optional

from payment_gateway.models.payment import PaymentRecord
from payment_gateway.store.base import PaymentStore


class InMemoryPaymentStore(PaymentStore):
    """
    Records live for the lifetime of the process.

    Every method is a single dict operation with no await in between, so on
    the event loop each read sees a whole record and writes to different keys
    never wait on each other.
    """

    def __init__(self):
        self._payments: dict[str, PaymentRecord] = {}
        self._idempotency_keys: dict[str, PaymentRecord] = {}

    async def insert(self, record: PaymentRecord) -> None:
        self._payments[record.id] = record

    async def bind_idempotency_token(self, token: Optional[str], record: PaymentRecord) -> None:
        if token is not None:
            self._idempotency_keys[token] = record

    async def get(self, payment_id: str) -> Optional[PaymentRecord]:
        return self._payments.get(payment_id)

    async def get_by_idempotency_token(self, token: str) -> Optional[PaymentRecord]:
        return self._idempotency_keys.get(token)

    def __len__(self) -> int:
        return len(self._payments)
