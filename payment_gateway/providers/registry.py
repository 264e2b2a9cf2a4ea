"""
Provider registry: maps a provider name to the integration that handles it.

The table is built once at startup. Names are matched case-insensitively, and
a request without a provider goes to the designated fallback integration.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Optional

from payment_gateway.providers.base import BankIntegration
from payment_gateway.providers.errors import ProviderConfigurationError, UnsupportedProviderError

logger = logging.getLogger("payment_gateway.providers.registry")

DEFAULT_PROVIDER = "SIMULATOR"


class ProviderRegistry:
    def __init__(
        self,
        integrations: Iterable[BankIntegration],
        default_provider: str = DEFAULT_PROVIDER,
    ):
        table: dict[str, BankIntegration] = {}
        for integration in integrations:
            for name in integration.provider_names:
                key = name.upper()
                if key in table:
                    raise ProviderConfigurationError(
                        f"Provider {key} is claimed by both "
                        f"{type(table[key]).__name__} and {type(integration).__name__}"
                    )
                table[key] = integration

        self._table = MappingProxyType(table)
        self._default_provider = default_provider

        if default_provider.upper() not in self._table:
            logger.warning(
                "Default provider %s has no registered integration; "
                "requests without a provider will be rejected",
                default_provider,
            )

    @property
    def default_provider(self) -> str:
        return self._default_provider

    @property
    def provider_names(self) -> list[str]:
        return sorted(self._table)

    def resolve(self, provider: Optional[str]) -> BankIntegration:
        """
        Return the integration for ``provider`` (or the default when None).

        Raises:
            UnsupportedProviderError: No integration handles the name.
        """
        target = self._default_provider if provider is None else provider
        integration = self._table.get(target.upper())
        if integration is None:
            raise UnsupportedProviderError(target)
        return integration
