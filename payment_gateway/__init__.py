"""Payment gateway with provider routing and idempotent retries."""

__version__ = "0.1.0"
