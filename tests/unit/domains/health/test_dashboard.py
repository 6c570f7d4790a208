"""Tests for HealthDashboard state handling."""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone

from hmkit.core.storage.encryption import FieldEncryptor
from hmkit.core.storage.models import STEP_COUNT
from hmkit.core.storage.sample_store import HealthSampleStore
from hmkit.domains.health.connectors.errors import AccessDeniedError, SourceUnavailableError
from hmkit.domains.health.connectors.providers import MockHealthDataProvider
from hmkit.domains.health.connectors.sample_store import SampleStoreDataProvider
from hmkit.domains.health.domain_logic.dashboard import HealthDashboard
from hmkit.domains.health.domain_logic.use_cases import (
    FetchHealthMetricsUseCase,
    RequestPermissionsUseCase,
    ValidateHealthMetricsUseCase,
)


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class FlakyProvider(MockHealthDataProvider):
    """Fails the first ``failures`` fetches with AccessDeniedError."""

    def __init__(self, failures: int = 1, available: bool = True):
        super().__init__()
        self.failures = failures
        self.available = available

    def is_available(self) -> bool:
        return self.available

    async def fetch_metrics(self, day):
        if self.failures:
            self.failures -= 1
            raise AccessDeniedError()
        return await super().fetch_metrics(day)


def _dashboard(provider) -> HealthDashboard:
    return HealthDashboard(
        FetchHealthMetricsUseCase(provider),
        RequestPermissionsUseCase(provider),
        ValidateHealthMetricsUseCase(),
    )


class TestLoad:
    def test_initial_state(self):
        dashboard = _dashboard(MockHealthDataProvider())
        assert dashboard.health_metrics is None
        assert dashboard.validation_result is None
        assert dashboard.error_message is None
        assert dashboard.is_loading is False
        assert dashboard.completion_percentage == 0.0
        assert dashboard.formatted_sleep_duration == "N/A"

    def test_load_populates_metrics_and_validation(self):
        dashboard = _dashboard(MockHealthDataProvider())
        _run(dashboard.load(date(2025, 7, 16)))
        assert dashboard.health_metrics.is_complete
        assert dashboard.validation_result.is_valid
        assert dashboard.completion_percentage == 1.0
        assert dashboard.formatted_date == "Jul 16, 2025"
        assert dashboard.is_loading is False

    def test_error_captured_as_message(self):
        dashboard = _dashboard(FlakyProvider(failures=1))
        _run(dashboard.load(date(2025, 7, 16)))
        assert dashboard.error_message == "Health data access permission was denied"
        assert dashboard.health_metrics is None
        assert dashboard.to_dict()["can_retry"] is True

    def test_retry_reloads_selected_date(self):
        dashboard = _dashboard(FlakyProvider(failures=1))
        _run(dashboard.load(date(2025, 7, 16)))
        _run(dashboard.retry())
        assert dashboard.error_message is None
        assert dashboard.health_metrics.date.date() == date(2025, 7, 16)

    def test_future_date_reports_invalid_data(self):
        dashboard = _dashboard(MockHealthDataProvider())
        tomorrow = datetime.now(timezone.utc) + timedelta(days=1)
        _run(dashboard.load(tomorrow))
        assert dashboard.error_message == "Invalid health data received"

    def test_warnings_exposed(self):
        dashboard = _dashboard(MockHealthDataProvider())
        # day 100 (Apr 10): 6.5h sleep, no advisory warnings
        _run(dashboard.load(date(2025, 4, 10)))
        assert not dashboard.has_validation_warnings
        assert dashboard.validation_warnings == []


class TestPermissions:
    def test_success_loads_today(self):
        dashboard = _dashboard(MockHealthDataProvider())
        _run(dashboard.request_permissions())
        assert dashboard.error_message is None
        assert dashboard.health_metrics is not None

    def test_unavailable_sets_message(self):
        provider = FlakyProvider(failures=0, available=False)
        dashboard = _dashboard(provider)
        assert dashboard.is_health_data_available is False
        _run(dashboard.request_permissions())
        assert dashboard.error_message == SourceUnavailableError.message
        assert dashboard.health_metrics is None


def test_to_dict_shape():
    dashboard = _dashboard(MockHealthDataProvider())
    _run(dashboard.load(date(2025, 7, 16)))
    payload = dashboard.to_dict()
    assert payload["selected_date"] == "Jul 16, 2025"
    assert payload["health_metrics"]["is_complete"] is True
    assert payload["validation"]["is_valid"] is True
    assert payload["can_retry"] is False


def test_unreadable_store_sets_retryable_message(authorized_store, sample_db):
    day = datetime(2025, 7, 16, tzinfo=timezone.utc)
    authorized_store.save_quantity_sample(STEP_COUNT, 8000, day)
    rotated = HealthSampleStore(sample_db, FieldEncryptor(FieldEncryptor.generate_key()))
    dashboard = _dashboard(SampleStoreDataProvider(rotated))

    _run(dashboard.load(day))
    assert dashboard.error_message.startswith("Failed to fetch health data")
    assert dashboard.health_metrics is None
    assert dashboard.to_dict()["can_retry"] is True
