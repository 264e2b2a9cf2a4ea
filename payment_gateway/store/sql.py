"""
SQLAlchemy-backed payment store.

Each operation runs in its own session and commits immediately. The
idempotency index is a separate table pointing at ``payments.id``; binding an
existing token overwrites it (last write wins).
"""

import dataclasses
import json
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payment_gateway.models.enums import PaymentStatus
from payment_gateway.models.payment import PaymentRecord, PaymentRequest
from payment_gateway.models.tables import IdempotencyKeyRow, PaymentRow
from payment_gateway.store.base import PaymentStore


def _to_row(record: PaymentRecord) -> PaymentRow:
    return PaymentRow(
        id=record.id,
        card_number=record.card_number,
        expiry_month=record.expiry_month,
        expiry_year=record.expiry_year,
        currency=record.currency,
        amount=record.amount,
        cvv=record.cvv,
        status=record.status.value,
        original_request=json.dumps(dataclasses.asdict(record.original_request)),
    )


def _to_record(row: PaymentRow) -> PaymentRecord:
    return PaymentRecord(
        id=row.id,
        card_number=row.card_number,
        expiry_month=row.expiry_month,
        expiry_year=row.expiry_year,
        currency=row.currency,
        amount=row.amount,
        cvv=row.cvv,
        status=PaymentStatus(row.status),
        original_request=PaymentRequest(**json.loads(row.original_request)),
    )


class SqlPaymentStore(PaymentStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, record: PaymentRecord) -> None:
        async with self._session_factory() as session:
            session.add(_to_row(record))
            await session.commit()

    async def bind_idempotency_token(self, token: Optional[str], record: PaymentRecord) -> None:
        if token is None:
            return
        async with self._session_factory() as session:
            await session.merge(IdempotencyKeyRow(token=token, payment_id=record.id))
            await session.commit()

    async def get(self, payment_id: str) -> Optional[PaymentRecord]:
        async with self._session_factory() as session:
            row = await session.get(PaymentRow, payment_id)
            return _to_record(row) if row else None

    async def get_by_idempotency_token(self, token: str) -> Optional[PaymentRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(PaymentRow)
                .join(IdempotencyKeyRow, IdempotencyKeyRow.payment_id == PaymentRow.id)
                .where(IdempotencyKeyRow.token == token)
            )
            row = result.scalar_one_or_none()
            return _to_record(row) if row else None
