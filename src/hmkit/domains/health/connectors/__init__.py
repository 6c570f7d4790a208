"""Health data connectors — abstraction layer for daily metric retrieval."""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable

from hmkit.domains.health.domain_logic.metric_models import HealthMetrics


@runtime_checkable
class HealthDataProvider(Protocol):
    """Abstract interface for daily health metric retrieval.

    Use cases call these methods without knowing whether data is synthesized,
    injected into the sample store and read back, or read from the store as-is.
    """

    def is_available(self) -> bool:
        """Whether the underlying source can be queried at all. No side effects."""
        ...

    async def request_access(self) -> None:
        """Negotiate read access. Idempotent once it has succeeded.

        Raises AccessDeniedError, SourceUnavailableError or UnknownHealthDataError.
        """
        ...

    async def fetch_metrics(self, day: date | datetime) -> HealthMetrics:
        """Return the five daily metrics for ``day``; absent metrics are None.

        Raises AccessDeniedError, SourceUnavailableError, FetchFailedError or
        InvalidDataError.
        """
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source: 'mock', 'mock_injection' or 'sample_store'."""
        ...

    def get_provenance(self) -> dict[str, str]:
        """Return provenance metadata suitable for tool responses."""
        ...
