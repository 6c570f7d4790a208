"""Sample store data provider — reads daily metrics from the HealthSampleStore.

Each metric is queried independently over the UTC day window. A metric with
no samples comes back as None; only a failure to reach the store fails the
whole fetch.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from datetime import date, datetime

from hmkit.core.storage.database import DatabaseError
from hmkit.core.storage.encryption import EncryptionError
from hmkit.core.storage.models import (
    ALL_SAMPLE_TYPES,
    ASLEEP_VALUES,
    HEART_RATE_VARIABILITY_SDNN,
    RESTING_HEART_RATE,
    SLEEP_ANALYSIS,
    STEP_COUNT,
    VO2_MAX,
    StatisticsOption,
)
from hmkit.core.storage.sample_store import (
    HealthSampleStore,
    SampleStoreError,
    StoreAuthorizationError,
    StoreUnavailableError,
)
from hmkit.domains.health.connectors.errors import (
    AccessDeniedError,
    FetchFailedError,
    SourceUnavailableError,
    UnknownHealthDataError,
)
from hmkit.domains.health.domain_logic.day_window import utc_day_bounds
from hmkit.domains.health.domain_logic.metric_models import HealthMetrics

logger = logging.getLogger(__name__)

READ_TYPES = frozenset(ALL_SAMPLE_TYPES)

# Failures below the store API: a wrong key, a closed or corrupt database.
BACKEND_ERRORS = (SampleStoreError, EncryptionError, DatabaseError, sqlite3.Error)


class SampleStoreDataProvider:
    """HealthDataProvider backed by a :class:`HealthSampleStore`.

    Usage::

        provider = SampleStoreDataProvider(store)
        await provider.request_access()
        metrics = await provider.fetch_metrics(date.today())
    """

    def __init__(
        self,
        store: HealthSampleStore,
        *,
        share_types: Iterable[str] = (),
    ) -> None:
        self._store = store
        self._share_types = frozenset(share_types)
        self._access_granted = False

    def is_available(self) -> bool:
        return self._store.is_available()

    async def request_access(self) -> None:
        """Request read access to the five metric types (and any share types)."""
        if self._access_granted:
            return
        if not self.is_available():
            raise SourceUnavailableError()
        try:
            granted = self._store.request_authorization(
                read_types=READ_TYPES, share_types=self._share_types
            )
        except StoreUnavailableError as exc:
            raise SourceUnavailableError(exc) from exc
        except BACKEND_ERRORS as exc:
            raise UnknownHealthDataError(exc) from exc
        if not granted:
            raise AccessDeniedError()
        self._access_granted = True

    async def fetch_metrics(self, day: date | datetime) -> HealthMetrics:
        start, end = utc_day_bounds(day)
        try:
            steps = self._store.statistics(
                STEP_COUNT, start, end, StatisticsOption.CUMULATIVE_SUM
            )
            hrv = self._store.statistics(
                HEART_RATE_VARIABILITY_SDNN, start, end, StatisticsOption.DISCRETE_AVERAGE
            )
            rhr = self._store.statistics(
                RESTING_HEART_RATE, start, end, StatisticsOption.DISCRETE_AVERAGE
            )
            vo2_max = self._store.statistics(
                VO2_MAX, start, end, StatisticsOption.DISCRETE_AVERAGE
            )
            sleep = self._sleep_duration(start, end)
        except StoreUnavailableError as exc:
            raise SourceUnavailableError(exc) from exc
        except StoreAuthorizationError as exc:
            raise AccessDeniedError(exc) from exc
        except BACKEND_ERRORS as exc:
            raise FetchFailedError(exc) from exc

        return HealthMetrics(
            steps=int(steps) if steps is not None else None,
            heart_rate_variability=hrv,
            resting_heart_rate=rhr,
            vo2_max=vo2_max,
            sleep_duration=sleep,
            date=start,
        )

    def _sleep_duration(self, start: datetime, end: datetime) -> float | None:
        """Total asleep seconds for sleep samples starting in the window."""
        total = sum(
            s.duration_seconds
            for s in self._store.samples(SLEEP_ANALYSIS, start, end)
            if s.value in ASLEEP_VALUES
        )
        return total if total > 0 else None

    @property
    def data_source(self) -> str:
        return "sample_store"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": "Data read from the health sample store.",
            "samples_stored": str(self._store.count_samples()),
        }
