"""
Payment orchestrator: the core execution engine.

Processes one payment request per call. The flow:

  1. Idempotency check (token seen before? same request or a conflict?)
  2. Expiry check (card must expire after the current month)
  3. Provider resolution (provider name → bank integration)
  4. Authorization (one call to the bank, no retries)
  5. Persistence (record, then token binding) and masked response

Idempotency guarantees:
  - A token replayed with an identical request returns the stored payment
    without contacting the bank again
  - A token replayed with any differing field is a conflict
  - Concurrent requests sharing a token are serialized in-process, so only
    the first reaches the bank

Nothing is persisted unless the bank returned a decision.
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional

from payment_gateway.audit.logger import log_event
from payment_gateway.engine.locks import TokenLocks
from payment_gateway.engine.projection import mask_card_number, to_response
from payment_gateway.engine.results import GatewayResult
from payment_gateway.engine.validation import check_expiry
from payment_gateway.models.enums import ErrorKind, PaymentStatus
from payment_gateway.models.payment import PaymentRecord, PaymentRequest
from payment_gateway.providers.base import AuthorizationOutcome, AuthorizationRequest, BankIntegration
from payment_gateway.providers.errors import (
    ProviderError,
    ProviderRejectedError,
    ProviderUnavailableError,
    UnsupportedProviderError,
)
from payment_gateway.providers.registry import ProviderRegistry
from payment_gateway.store.base import PaymentStore

logger = logging.getLogger("payment_gateway.orchestrator")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class PaymentOrchestrator:
    """
    Entry point for creating and reading payments.

    Holds no per-payment state between calls; everything shared lives in the
    store. The only state kept here is the table of in-flight token locks.

    Args:
        registry: Resolves provider names to bank integrations.
        store: Where payment records and token bindings are kept.
        clock: Returns today's date; used for the expiry check.
        provider_timeout: Seconds to wait for a bank decision before treating
            the bank as unavailable. None waits for the integration's own
            timeout.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        store: PaymentStore,
        clock: Callable[[], date] = _utc_today,
        provider_timeout: Optional[float] = None,
    ):
        self._registry = registry
        self._store = store
        self._clock = clock
        self._provider_timeout = provider_timeout
        self._token_locks = TokenLocks()

    @property
    def provider_names(self) -> list[str]:
        return self._registry.provider_names

    async def process_payment(
        self,
        request: PaymentRequest,
        idempotency_token: Optional[str] = None,
    ) -> GatewayResult:
        logger.info(
            "Processing payment for amount: %d %s, provider: %s, idempotency token: %s",
            request.amount,
            request.currency,
            request.provider,
            idempotency_token,
        )

        async with self._token_locks.hold(idempotency_token):
            return await self._process(request, idempotency_token)

    async def get_payment_by_id(self, payment_id: str) -> GatewayResult:
        logger.debug("Looking up payment %s", payment_id)
        record = await self._store.get(payment_id)
        if record is None:
            return GatewayResult.failure(ErrorKind.NOT_FOUND, f"Payment not found: {payment_id}")
        return GatewayResult.success(to_response(record))

    async def _process(
        self,
        request: PaymentRequest,
        idempotency_token: Optional[str],
    ) -> GatewayResult:
        # Step 1: Idempotency check
        if idempotency_token is not None:
            existing = await self._store.get_by_idempotency_token(idempotency_token)
            if existing is not None:
                if existing.original_request == request:
                    log_event("idempotent_replay", payment_id=existing.id, details={
                        "idempotency_token": idempotency_token,
                        "status": existing.status.value,
                    })
                    return GatewayResult.success(to_response(existing), replayed=True)

                log_event("idempotency_conflict", payment_id=existing.id, details={
                    "idempotency_token": idempotency_token,
                }, level=logging.WARNING)
                return GatewayResult.failure(
                    ErrorKind.IDEMPOTENCY_CONFLICT,
                    "Idempotency key reused for a different request",
                )

        # Step 2: Expiry check
        expiry = check_expiry(request.expiry_month, request.expiry_year, self._clock())
        if not expiry.valid:
            log_event("validation_failed", details={"message": expiry.message})
            return GatewayResult.failure(ErrorKind.VALIDATION_ERROR, expiry.message)

        # Step 3: Provider resolution
        try:
            integration = self._registry.resolve(request.provider)
        except UnsupportedProviderError as e:
            log_event("provider_unsupported", details={"provider": e.provider})
            return GatewayResult.failure(ErrorKind.UNSUPPORTED_PROVIDER, str(e))

        # Step 4: Authorization
        auth_request = AuthorizationRequest.from_payment_request(request)
        try:
            outcome = await self._authorize(integration, auth_request)
        except ProviderRejectedError as e:
            log_event("provider_failed", details={
                "provider": type(integration).__name__,
                "error": str(e),
                "status_code": e.status_code,
            }, level=logging.ERROR)
            return GatewayResult.failure(ErrorKind.PROVIDER_REJECTED, str(e))
        except ProviderError as e:
            log_event("provider_failed", details={
                "provider": type(integration).__name__,
                "error": str(e),
                "status_code": e.status_code,
            }, level=logging.ERROR)
            return GatewayResult.failure(ErrorKind.PROVIDER_UNAVAILABLE, str(e))

        status = PaymentStatus.AUTHORIZED if outcome.authorized else PaymentStatus.DECLINED

        # Step 5: Persist, then bind the token
        record = PaymentRecord.from_request(request, status)
        await self._store.insert(record)
        if idempotency_token is not None:
            await self._store.bind_idempotency_token(idempotency_token, record)

        log_event("payment_created", payment_id=record.id, details={
            "status": status.value,
            "provider": type(integration).__name__,
            "authorization_code": outcome.authorization_code,
            "card_last_four": mask_card_number(record.card_number),
            "amount": record.amount,
            "currency": record.currency,
        })
        return GatewayResult.success(to_response(record))

    async def _authorize(
        self,
        integration: BankIntegration,
        request: AuthorizationRequest,
    ) -> AuthorizationOutcome:
        if self._provider_timeout is None:
            return await integration.authorize(request)
        try:
            return await asyncio.wait_for(integration.authorize(request), timeout=self._provider_timeout)
        except asyncio.TimeoutError as e:
            raise ProviderUnavailableError(
                f"No authorization decision within {self._provider_timeout:.1f}s"
            ) from e
