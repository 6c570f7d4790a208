"""Injection provider — writes synthetic samples, then reads them back.

Staging aid: on the first fetch it clears the five metric types from
the sample store, writes 7 days of trending samples, and from then on every
fetch goes through :class:`SampleStoreDataProvider`, i.e. the same query path
production uses.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

from hmkit.core.storage.models import (
    ALL_SAMPLE_TYPES,
    HEART_RATE_VARIABILITY_SDNN,
    RESTING_HEART_RATE,
    SLEEP_ANALYSIS,
    STEP_COUNT,
    VO2_MAX,
    SleepValue,
)
from hmkit.core.storage.sample_store import (
    HealthSampleStore,
    NoSamplesError,
    StoreAuthorizationError,
    StoreUnavailableError,
)
from hmkit.domains.health.connectors.errors import (
    AccessDeniedError,
    FetchFailedError,
    SourceUnavailableError,
)
from hmkit.domains.health.connectors.mock_data import InjectedDay, generate_injection_series
from hmkit.domains.health.connectors.sample_store import (
    BACKEND_ERRORS,
    SampleStoreDataProvider,
)
from hmkit.domains.health.domain_logic.metric_models import HealthMetrics

logger = logging.getLogger(__name__)

# Injected sleep starts at 22:00 on its day.
SLEEP_START_HOUR = 22

# Order in which existing samples are cleared
_CLEAR_ORDER = [
    STEP_COUNT,
    VO2_MAX,
    RESTING_HEART_RATE,
    HEART_RATE_VARIABILITY_SDNN,
    SLEEP_ANALYSIS,
]


class MockDataWithInjectionProvider:
    """HealthDataProvider that seeds the sample store once per instance.

    ``has_injected_data`` starts False and flips after the first successful
    injection; :meth:`reset` clears it.
    """

    def __init__(
        self,
        store: HealthSampleStore,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._reader = SampleStoreDataProvider(store, share_types=ALL_SAMPLE_TYPES)
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.has_injected_data = False

    def is_available(self) -> bool:
        return self._store.is_available()

    async def request_access(self) -> None:
        """Request read and share access to the five metric types."""
        await self._reader.request_access()

    async def fetch_metrics(self, day: date | datetime) -> HealthMetrics:
        if not self.has_injected_data:
            await self._inject()
            self.has_injected_data = True
        return await self._reader.fetch_metrics(day)

    def reset(self) -> None:
        """Forget that injection happened so the next fetch re-injects."""
        self.has_injected_data = False

    # ------------------------------------------------------------------
    # Injection
    # ------------------------------------------------------------------

    async def _inject(self) -> None:
        logger.info("Starting synthetic sample injection")
        now = self._clock()
        try:
            self._clear_existing_samples()
            series = generate_injection_series(now, self._rng)
            for day in series:
                self._save_day(day)
        except StoreUnavailableError as exc:
            raise SourceUnavailableError(exc) from exc
        except StoreAuthorizationError as exc:
            raise AccessDeniedError(exc) from exc
        except BACKEND_ERRORS as exc:
            raise FetchFailedError(exc) from exc
        logger.info("Injected %d days of synthetic samples", len(series))

    def _clear_existing_samples(self) -> None:
        for sample_type in _CLEAR_ORDER:
            try:
                self._store.delete_samples(sample_type)
            except NoSamplesError:
                logger.info("No existing %s samples to clear", sample_type)

    def _save_day(self, day: InjectedDay) -> None:
        start = day.start_of_day
        self._store.save_quantity_sample(STEP_COUNT, day.steps, start)
        self._store.save_quantity_sample(VO2_MAX, day.vo2_max, start)
        self._store.save_quantity_sample(RESTING_HEART_RATE, day.resting_heart_rate, start)
        self._store.save_quantity_sample(
            HEART_RATE_VARIABILITY_SDNN, day.heart_rate_variability, start
        )
        sleep_start = start + timedelta(hours=SLEEP_START_HOUR)
        self._store.save_category_sample(
            SLEEP_ANALYSIS,
            SleepValue.ASLEEP_UNSPECIFIED,
            sleep_start,
            sleep_start + timedelta(hours=day.sleep_hours),
        )
        logger.info(
            "Day %d: Steps: %d, VO2Max: %.1f, RHR: %.1f, HRV: %.1f, Sleep: %.1fh",
            day.day_offset + 1,
            day.steps,
            day.vo2_max,
            day.resting_heart_rate,
            day.heart_rate_variability,
            day.sleep_hours,
        )

    @property
    def data_source(self) -> str:
        return "mock_injection"

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "data_source_note": (
                "Synthetic 7-day samples injected into the sample store "
                "and read back through the production query path."
            ),
            "injected": "yes" if self.has_injected_data else "no",
        }
