"""Liveness endpoint."""

from fastapi import APIRouter, Depends

from payment_gateway.api.payments import get_orchestrator
from payment_gateway.engine.orchestrator import PaymentOrchestrator

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(orchestrator: PaymentOrchestrator = Depends(get_orchestrator)):
    return {"status": "ok", "providers": orchestrator.provider_names}
