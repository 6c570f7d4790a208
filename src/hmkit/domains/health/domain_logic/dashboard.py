"""Dashboard state: the selected day's metrics, validation and error status.

Holds what a dashboard screen renders. Errors are captured as a message so
the caller can offer a retry instead of failing.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from hmkit.domains.health.connectors.errors import HealthDataError
from hmkit.domains.health.domain_logic.formatter import (
    NOT_AVAILABLE,
    format_date,
    format_sleep_duration,
)
from hmkit.domains.health.domain_logic.metric_models import HealthMetrics, ValidationResult
from hmkit.domains.health.domain_logic.use_cases import (
    FetchHealthMetricsUseCase,
    RequestPermissionsUseCase,
    ValidateHealthMetricsUseCase,
)

logger = logging.getLogger(__name__)


class HealthDashboard:
    """Loads and validates metrics for a selected day.

    Usage::

        dashboard = HealthDashboard(fetch_use_case, permissions_use_case, validate_use_case)
        await dashboard.load(date(2025, 7, 16))
        if dashboard.error_message:
            await dashboard.retry()
    """

    def __init__(
        self,
        fetch_use_case: FetchHealthMetricsUseCase,
        permissions_use_case: RequestPermissionsUseCase,
        validate_use_case: ValidateHealthMetricsUseCase,
    ) -> None:
        self._fetch = fetch_use_case
        self._permissions = permissions_use_case
        self._validate = validate_use_case

        self.selected_date: date | datetime = datetime.now(timezone.utc)
        self.health_metrics: HealthMetrics | None = None
        self.validation_result: ValidationResult | None = None
        self.error_message: str | None = None
        self.is_loading = False

    async def load(self, day: date | datetime | None = None) -> None:
        """Fetch and validate metrics for ``day`` (default: the selected date)."""
        if day is not None:
            self.selected_date = day
        self.is_loading = True
        self.error_message = None
        self.validation_result = None
        try:
            metrics = await self._fetch.execute(self.selected_date)
            self.health_metrics = metrics
            self.validation_result = self._validate.execute(metrics)
            if self.validation_result.warnings:
                logger.warning(
                    "Health metrics warnings: %s", ", ".join(self.validation_result.warnings)
                )
        except HealthDataError as exc:
            self.error_message = str(exc)
            self.health_metrics = None
            self.validation_result = None
        finally:
            self.is_loading = False

    async def request_permissions(self) -> None:
        """Request access, then load today's metrics on success."""
        try:
            await self._permissions.execute()
        except HealthDataError as exc:
            self.error_message = str(exc)
            return
        await self.load(datetime.now(timezone.utc))

    async def retry(self) -> None:
        await self.load(self.selected_date)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def is_health_data_available(self) -> bool:
        return self._permissions.is_health_data_available()

    @property
    def has_validation_warnings(self) -> bool:
        return bool(self.validation_result and self.validation_result.warnings)

    @property
    def validation_warnings(self) -> list[str]:
        return list(self.validation_result.warnings) if self.validation_result else []

    @property
    def completion_percentage(self) -> float:
        if self.health_metrics is None:
            return 0.0
        return self.health_metrics.completion_percentage

    @property
    def formatted_sleep_duration(self) -> str:
        if self.health_metrics is None:
            return NOT_AVAILABLE
        return format_sleep_duration(self.health_metrics.sleep_duration)

    @property
    def formatted_date(self) -> str:
        return format_date(self.selected_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "selected_date": self.formatted_date,
            "health_metrics": self.health_metrics.to_dict() if self.health_metrics else None,
            "validation": self.validation_result.to_dict() if self.validation_result else None,
            "completion_percentage": self.completion_percentage,
            "formatted_sleep_duration": self.formatted_sleep_duration,
            "error_message": self.error_message,
            "can_retry": self.error_message is not None,
        }
