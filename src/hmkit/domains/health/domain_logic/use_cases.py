"""Use cases: the business rules between tools and HealthDataProviders."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timezone

from hmkit.domains.health.connectors import HealthDataProvider
from hmkit.domains.health.connectors.errors import InvalidDataError, SourceUnavailableError
from hmkit.domains.health.domain_logic.day_window import to_utc_date
from hmkit.domains.health.domain_logic.metric_models import (
    METRIC_NAMES,
    HealthMetrics,
    ValidationResult,
)
from hmkit.domains.health.domain_logic.validator import validate_health_metrics

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FetchHealthMetricsUseCase:
    """Fetch one day of metrics, refusing dates after today (UTC)."""

    def __init__(
        self,
        provider: HealthDataProvider,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._provider = provider
        self._clock = clock

    async def execute(self, day: date | datetime) -> HealthMetrics:
        if to_utc_date(day) > to_utc_date(self._clock()):
            raise InvalidDataError()

        metrics = await self._provider.fetch_metrics(day)

        if not metrics.is_complete:
            logger.warning(
                "Incomplete health metrics for %s. Available: %d/%d",
                to_utc_date(day).isoformat(),
                metrics.completed_metrics_count,
                len(METRIC_NAMES),
            )
        return metrics


class RequestPermissionsUseCase:
    """Request provider access after checking the source exists."""

    def __init__(self, provider: HealthDataProvider) -> None:
        self._provider = provider

    async def execute(self) -> None:
        if not self.is_health_data_available():
            raise SourceUnavailableError()
        await self._provider.request_access()
        logger.info("Health data permissions granted (%s)", self._provider.data_source)

    def is_health_data_available(self) -> bool:
        return self._provider.is_available()


class ValidateHealthMetricsUseCase:
    """Thin wrapper so validation can be swapped like the other use cases."""

    def execute(self, metrics: HealthMetrics) -> ValidationResult:
        return validate_health_metrics(metrics)
