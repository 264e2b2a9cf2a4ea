"""Application configuration via environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./payment_gateway.db"
    store_backend: Literal["memory", "sql"] = "memory"
    log_level: str = "INFO"
    default_provider: str = "SIMULATOR"
    bank_simulator_url: str = "http://localhost:8080/payments"
    bank_timeout_seconds: float = 10.0
    provider_timeout_seconds: float = 15.0  # Upper bound on a single authorization
    mock_acquirer_latency_ms: int = 0
    mock_acquirer_failure_rate: float = 0.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
