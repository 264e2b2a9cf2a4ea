"""
Errors raised by bank integrations and the provider registry.

Integrations never retry on their own. They report what happened and the
orchestrator decides what the caller sees:

  - ProviderUnavailableError: the bank could not be reached, timed out, or
    answered with a server-side fault. A later retry might succeed.
  - ProviderRejectedError: the bank reported the request itself as malformed.
    A business decline is NOT an error; it is an outcome with authorized=False.
"""

from typing import Optional


class ProviderError(Exception):
    """Base exception for bank integration failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderUnavailableError(ProviderError):
    """Backend unreachable, timed out, or returned a 5xx-equivalent fault."""


class ProviderRejectedError(ProviderError):
    """Backend refused the request as malformed (4xx-equivalent)."""


class UnsupportedProviderError(Exception):
    """No registered integration handles the requested provider name."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported payment provider: {provider}")
        self.provider = provider


class ProviderConfigurationError(Exception):
    """The set of registered integrations is inconsistent (raised at startup)."""
