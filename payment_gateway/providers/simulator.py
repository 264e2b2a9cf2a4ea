"""
HTTP client for the acquiring bank simulator.

Posts the normalized authorization request as JSON and reads back
``{"authorized": bool, "authorization_code": str}``. Status handling:

  - 2xx: parse the decision (authorized or declined)
  - 4xx: the bank rejected the request as malformed
  - 5xx, transport errors, timeouts: the bank is unavailable
"""

import logging
from typing import Optional

import httpx

from payment_gateway.config import settings
from payment_gateway.providers.base import AuthorizationOutcome, AuthorizationRequest, BankIntegration
from payment_gateway.providers.errors import ProviderRejectedError, ProviderUnavailableError

logger = logging.getLogger("payment_gateway.providers.simulator")


class SimulatorBankClient(BankIntegration):
    """Bank integration backed by the simulator's HTTP API."""

    def __init__(self, http_client: httpx.AsyncClient, bank_url: Optional[str] = None):
        self._http = http_client
        self._bank_url = bank_url or settings.bank_simulator_url

    @property
    def provider_names(self) -> tuple[str, ...]:
        return ("SIMULATOR",)

    async def authorize(self, request: AuthorizationRequest) -> AuthorizationOutcome:
        logger.info("Sending payment request to simulator bank: card ending %s", request.last_four)

        try:
            response = await self._http.post(self._bank_url, json=request.to_payload())
        except httpx.TimeoutException as e:
            raise ProviderUnavailableError(f"Bank simulator timed out: {e}") from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(f"Bank simulator unreachable: {e}") from e

        if response.is_client_error:
            raise ProviderRejectedError(
                "Bank rejected the request (Bad Request)",
                status_code=response.status_code,
            )
        if response.is_server_error:
            raise ProviderUnavailableError(
                "Bank service unavailable",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderUnavailableError(
                f"Bank simulator returned an unreadable response: {e}",
                status_code=response.status_code,
            ) from e

        # Anything but a JSON boolean is a fault, never a guessed decision
        authorized = body.get("authorized") if isinstance(body, dict) else None
        if not isinstance(authorized, bool):
            raise ProviderUnavailableError(
                f"Bank simulator returned an unreadable response: authorized={authorized!r}",
                status_code=response.status_code,
            )

        return AuthorizationOutcome(
            authorized=authorized,
            authorization_code=body.get("authorization_code") or "",
        )
