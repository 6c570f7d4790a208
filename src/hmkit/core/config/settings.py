"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Health Metrics Kit configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; there is no auth layer in front of the tools.
    hmkit_host: str = "127.0.0.1"
    hmkit_port: int = 8003
    hmkit_log_level: str = "info"
    hmkit_allow_insecure_bind: bool = False

    # Which HealthDataProvider variant to build:
    #   testing     -> deterministic mock data
    #   development -> synthetic samples injected into the store, then read back
    #   production  -> read the sample store as-is
    health_data_environment: Literal["testing", "development", "production"] = "testing"

    # Mock provider latency emulation (seconds, must stay below 1s)
    mock_latency_seconds: float = 0.5

    # Sample store (stands in for the device health store)
    sample_store_db_path: str = ":memory:"
    sample_store_available: bool = True
    sample_store_authorization: Literal["grant", "deny"] = "grant"

    # Seed for injection jitter; unset means a fresh random sequence per process
    injection_seed: int | None = None

    # Encryption of sample values at rest; empty generates an ephemeral key
    encryption_key: str = ""


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
