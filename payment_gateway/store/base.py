"""
Abstract payment store.

Two indexes over the same records: by payment id, and by the client's
idempotency token. There are no cross-key transactions. If the process dies
between ``insert`` and ``bind_idempotency_token``, the record stays unbound
and the next retry with that token is processed again.
"""

from abc import ABC, abstractmethod
from typing import Optional

from payment_gateway.models.payment import PaymentRecord


class PaymentStore(ABC):
    @abstractmethod
    async def insert(self, record: PaymentRecord) -> None:
        """Store a record under its id. Ids are unique by construction."""
        ...

    @abstractmethod
    async def bind_idempotency_token(self, token: Optional[str], record: PaymentRecord) -> None:
        """Point ``token`` at ``record``. No-op when token is None; last write wins."""
        ...

    @abstractmethod
    async def get(self, payment_id: str) -> Optional[PaymentRecord]:
        ...

    @abstractmethod
    async def get_by_idempotency_token(self, token: str) -> Optional[PaymentRecord]:
        ...
