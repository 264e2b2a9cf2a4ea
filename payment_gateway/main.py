"""
Payment Gateway: card payment routing with idempotent retries.

Accepts card payments from merchants, routes each one to an acquiring bank
(the bank simulator by default, or the mock acquirer), stores the outcome,
and makes client retries safe through the Idempotency-Key header.

Start the server:
    uvicorn payment_gateway.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from payment_gateway.api.health import router as health_router
from payment_gateway.api.payments import router as payments_router
from payment_gateway.config import settings
from payment_gateway.database import async_session, init_db
from payment_gateway.engine.orchestrator import PaymentOrchestrator
from payment_gateway.providers import MockAcquirerClient, ProviderRegistry, SimulatorBankClient
from payment_gateway.store import InMemoryPaymentStore, PaymentStore, SqlPaymentStore

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger("payment_gateway")


async def build_store() -> PaymentStore:
    if settings.store_backend == "sql":
        await init_db()
        return SqlPaymentStore(async_session)
    return InMemoryPaymentStore()


def build_registry(http_client: httpx.AsyncClient) -> ProviderRegistry:
    return ProviderRegistry(
        [
            SimulatorBankClient(http_client, settings.bank_simulator_url),
            MockAcquirerClient(),
        ],
        default_provider=settings.default_provider,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the store, bank integrations and orchestrator on startup."""
    async with httpx.AsyncClient(timeout=settings.bank_timeout_seconds) as http_client:
        registry = build_registry(http_client)
        store = await build_store()
        app.state.orchestrator = PaymentOrchestrator(
            registry,
            store,
            provider_timeout=settings.provider_timeout_seconds,
        )
        logger.info(
            "Payment gateway ready: store=%s providers=%s default=%s",
            settings.store_backend,
            ",".join(registry.provider_names),
            registry.default_provider,
        )
        yield


app = FastAPI(
    title="Payment Gateway",
    description=(
        "Card payment gateway that routes payments to acquiring banks, stores "
        "the authoritative outcome, and makes client retries safe with "
        "idempotency keys."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(payments_router)
