from payment_gateway.store.base import PaymentStore
from payment_gateway.store.memory import InMemoryPaymentStore
from payment_gateway.store.sql import SqlPaymentStore

__all__ = ["PaymentStore", "InMemoryPaymentStore", "SqlPaymentStore"]
