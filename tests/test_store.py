"""Tests for the in-memory and SQL payment stores."""

import dataclasses

import pytest

from payment_gateway.models.enums import PaymentStatus
from payment_gateway.models.payment import PaymentRecord


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_store, sql_store):
    return memory_store if request.param == "memory" else sql_store


@pytest.mark.asyncio
async def test_insert_and_get(store, payment_request):
    record = PaymentRecord.from_request(payment_request, PaymentStatus.AUTHORIZED)

    await store.insert(record)

    assert await store.get(record.id) == record


@pytest.mark.asyncio
async def test_get_unknown(store):
    assert await store.get("missing") is None
    assert await store.get_by_idempotency_token("missing") is None


@pytest.mark.asyncio
async def test_bind_token(store, payment_request):
    record = PaymentRecord.from_request(payment_request, PaymentStatus.DECLINED)
    await store.insert(record)

    await store.bind_idempotency_token("k1", record)

    found = await store.get_by_idempotency_token("k1")
    assert found == record
    assert found.original_request == payment_request


@pytest.mark.asyncio
async def test_bind_none_token_is_noop(store, payment_request):
    record = PaymentRecord.from_request(payment_request, PaymentStatus.AUTHORIZED)
    await store.insert(record)

    await store.bind_idempotency_token(None, record)

    assert await store.get(record.id) == record


@pytest.mark.asyncio
async def test_rebinding_token_last_write_wins(store, payment_request):
    first = PaymentRecord.from_request(payment_request, PaymentStatus.AUTHORIZED)
    second = PaymentRecord.from_request(payment_request, PaymentStatus.AUTHORIZED)
    await store.insert(first)
    await store.insert(second)

    await store.bind_idempotency_token("k1", first)
    await store.bind_idempotency_token("k1", second)

    assert (await store.get_by_idempotency_token("k1")).id == second.id


@pytest.mark.asyncio
async def test_original_request_round_trips_without_provider(store, payment_request):
    request = dataclasses.replace(payment_request, provider=None)
    record = PaymentRecord.from_request(request, PaymentStatus.AUTHORIZED)
    await store.insert(record)

    stored = await store.get(record.id)

    assert stored.original_request == request
    assert stored.original_request.provider is None
