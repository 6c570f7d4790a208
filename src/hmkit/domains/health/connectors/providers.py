"""Mock HealthDataProvider and the environment-driven provider factory."""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import date, datetime

from hmkit.core.storage.sample_store import HealthSampleStore
from hmkit.domains.health.connectors import HealthDataProvider
from hmkit.domains.health.connectors.mock_data import generate_mock_health_metrics
from hmkit.domains.health.domain_logic.metric_models import HealthMetrics

logger = logging.getLogger(__name__)

# Latency emulation must stay well under a second.
MAX_MOCK_LATENCY_SECONDS = 0.95

ENVIRONMENTS = ("testing", "development", "production")


class MockHealthDataProvider:
    """Uses the deterministic day-of-year generator. Always available."""

    def __init__(self, latency_seconds: float = 0.0) -> None:
        if latency_seconds < 0:
            raise ValueError("latency_seconds must not be negative")
        self._latency = min(latency_seconds, MAX_MOCK_LATENCY_SECONDS)

    @property
    def latency_seconds(self) -> float:
        """Delay applied before each fetch, after capping."""
        return self._latency

    def is_available(self) -> bool:
        return True

    async def request_access(self) -> None:
        # No permission model behind mock data.
        return None

    async def fetch_metrics(self, day: date | datetime) -> HealthMetrics:
        if self._latency:
            await asyncio.sleep(self._latency)
        return generate_mock_health_metrics(day)

    @property
    def data_source(self) -> str:
        return "mock"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Using simulated health data, deterministic per calendar day. "
                "Switch HEALTH_DATA_ENVIRONMENT to read the sample store."
            ),
        }


def create_health_data_provider(
    environment: str,
    store: HealthSampleStore | None = None,
    *,
    mock_latency_seconds: float = 0.0,
    injection_seed: int | None = None,
) -> HealthDataProvider:
    """Factory function to create a HealthDataProvider by environment name.

    Args:
        environment: "testing" (mock), "development" (inject then read) or
            "production" (read the sample store).
        store: Backing sample store; required for development and production.
        mock_latency_seconds: Artificial delay for the mock provider.
        injection_seed: Seed for injection jitter.

    Returns:
        A HealthDataProvider instance.
    """
    if environment == "testing":
        return MockHealthDataProvider(latency_seconds=mock_latency_seconds)

    if environment not in ENVIRONMENTS:
        raise ValueError(f"Unknown health data environment: {environment}")
    if store is None:
        raise ValueError(f"Environment {environment!r} requires a sample store")

    if environment == "development":
        from hmkit.domains.health.connectors.injection import MockDataWithInjectionProvider

        return MockDataWithInjectionProvider(store, rng=random.Random(injection_seed))

    from hmkit.domains.health.connectors.sample_store import SampleStoreDataProvider

    return SampleStoreDataProvider(store)
