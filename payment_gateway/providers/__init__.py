from payment_gateway.providers.base import AuthorizationOutcome, AuthorizationRequest, BankIntegration
from payment_gateway.providers.errors import (
    ProviderConfigurationError,
    ProviderError,
    ProviderRejectedError,
    ProviderUnavailableError,
    UnsupportedProviderError,
)
from payment_gateway.providers.mock_acquirer import MockAcquirerClient
from payment_gateway.providers.registry import DEFAULT_PROVIDER, ProviderRegistry
from payment_gateway.providers.simulator import SimulatorBankClient

__all__ = [
    "AuthorizationOutcome",
    "AuthorizationRequest",
    "BankIntegration",
    "DEFAULT_PROVIDER",
    "MockAcquirerClient",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderRegistry",
    "ProviderRejectedError",
    "ProviderUnavailableError",
    "SimulatorBankClient",
    "UnsupportedProviderError",
]
