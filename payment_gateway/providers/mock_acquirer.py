"""
In-process mock acquirer.

Stands in for a third-party acquirer (exposed under the STRIPE provider
name). Authorizes every payment by default; latency and a failure rate can be
configured to exercise the gateway's error paths:

  - first half of the failure band: backend unavailable
  - second half: request rejected as malformed
"""

import asyncio
import logging
import random
import uuid
from typing import Optional

from payment_gateway.config import settings
from payment_gateway.providers.base import AuthorizationOutcome, AuthorizationRequest, BankIntegration
from payment_gateway.providers.errors import ProviderRejectedError, ProviderUnavailableError

logger = logging.getLogger("payment_gateway.providers.mock_acquirer")


class MockAcquirerClient(BankIntegration):
    def __init__(
        self,
        failure_rate: Optional[float] = None,
        latency_ms: Optional[int] = None,
        provider_names: tuple[str, ...] = ("STRIPE",),
    ):
        self._failure_rate = failure_rate if failure_rate is not None else settings.mock_acquirer_failure_rate
        self._latency_ms = latency_ms if latency_ms is not None else settings.mock_acquirer_latency_ms
        self._provider_names = provider_names

    @property
    def provider_names(self) -> tuple[str, ...]:
        return self._provider_names

    async def authorize(self, request: AuthorizationRequest) -> AuthorizationOutcome:
        logger.info("Processing payment via mock acquirer: card ending %s", request.last_four)

        if self._latency_ms > 0:
            jitter = random.uniform(0.5, 1.5)
            await asyncio.sleep(self._latency_ms * jitter / 1000)

        roll = random.random()

        if roll < self._failure_rate * 0.5:
            raise ProviderUnavailableError(
                "Mock acquirer temporarily unavailable",
                status_code=503,
            )

        if roll < self._failure_rate:
            raise ProviderRejectedError(
                "Mock acquirer rejected the request",
                status_code=400,
            )

        return AuthorizationOutcome(
            authorized=True,
            authorization_code=f"stripe_{uuid.uuid4()}",
        )
