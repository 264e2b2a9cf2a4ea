"""Shared test fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from payment_gateway.engine.orchestrator import PaymentOrchestrator
from payment_gateway.models.payment import PaymentRequest
from payment_gateway.models.tables import Base
from payment_gateway.providers.registry import ProviderRegistry
from payment_gateway.store.memory import InMemoryPaymentStore
from payment_gateway.store.sql import SqlPaymentStore
from tests.fakes import TODAY, FakeBank


@pytest.fixture
def simulator_bank():
    return FakeBank(names=("SIMULATOR",))


@pytest.fixture
def stripe_bank():
    return FakeBank(names=("STRIPE",))


@pytest.fixture
def registry(simulator_bank, stripe_bank):
    return ProviderRegistry([simulator_bank, stripe_bank])


@pytest.fixture
def memory_store():
    return InMemoryPaymentStore()


@pytest.fixture
def orchestrator(registry, memory_store):
    return PaymentOrchestrator(registry, memory_store, clock=lambda: TODAY)


@pytest.fixture
def payment_request():
    return PaymentRequest(
        card_number="1234567890123456",
        expiry_month=12,
        expiry_year=2025,
        currency="USD",
        amount=100,
        cvv="123",
        provider="SIMULATOR",
    )


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    return SqlPaymentStore(session_factory)
