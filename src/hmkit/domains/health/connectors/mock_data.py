"""Mock health data generators for development and testing.

Two generators live here:

* :func:`generate_mock_health_metrics` — deterministic, keyed by the UTC
  day-of-year. The same calendar day always yields the same record, at any
  time of day and in any year.
* :func:`generate_injection_series` — a 7-day trend with bounded jitter,
  written into the sample store by the injection provider so the real query
  path can be exercised with controlled inputs.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from hmkit.domains.health.domain_logic.day_window import (
    day_of_year,
    to_utc_date,
    utc_start_of_day,
)
from hmkit.domains.health.domain_logic.metric_models import (
    GENERATION_RULES,
    HEART_RATE_VARIABILITY,
    RESTING_HEART_RATE,
    SECONDS_PER_HOUR,
    SLEEP_DURATION,
    STEPS,
    VO2_MAX,
    HealthMetrics,
)

INJECTION_DAYS = 7


def generate_mock_health_metrics(day: date | datetime) -> HealthMetrics:
    """Return a fully populated record for the UTC calendar day of ``day``.

    Each metric is ``base + (day_of_year % modulo) * step`` using
    :data:`GENERATION_RULES`. The record's ``date`` is the UTC start of day.
    """
    seed = day_of_year(day)
    return HealthMetrics(
        steps=int(GENERATION_RULES[STEPS].value(seed)),
        heart_rate_variability=GENERATION_RULES[HEART_RATE_VARIABILITY].value(seed),
        resting_heart_rate=GENERATION_RULES[RESTING_HEART_RATE].value(seed),
        vo2_max=GENERATION_RULES[VO2_MAX].value(seed),
        sleep_duration=GENERATION_RULES[SLEEP_DURATION].value(seed) * SECONDS_PER_HOUR,
        date=utc_start_of_day(day),
    )


@dataclass(frozen=True)
class InjectedDay:
    """Synthetic values for one day of the injection series."""

    day_offset: int
    start_of_day: datetime
    steps: int
    vo2_max: float
    resting_heart_rate: float
    heart_rate_variability: float
    sleep_hours: float


def generate_injection_series(
    today: date | datetime,
    rng: random.Random,
    days: int = INJECTION_DAYS,
) -> list[InjectedDay]:
    """Build ``days`` days of trending samples ending at ``today`` (offset 0).

    Drift per day offset ``d``, plus uniform jitter from ``rng``:

    - steps: 8000 + 1200·d ± 500
    - VO₂Max: 42.0 + 0.3·d ± 1.0
    - resting HR: 65.0 − 0.5·d ± 3.0
    - HRV: 45.0 + 1.5·d ± 5.0
    - sleep hours: 7.5 + 0.5·(d mod 3) ± 0.5
    """
    anchor = to_utc_date(today)
    series = []
    for offset in range(days):
        series.append(InjectedDay(
            day_offset=offset,
            start_of_day=utc_start_of_day(anchor - timedelta(days=offset)),
            steps=8000 + offset * 1200 + rng.randint(-500, 500),
            vo2_max=42.0 + offset * 0.3 + rng.uniform(-1.0, 1.0),
            resting_heart_rate=65.0 - offset * 0.5 + rng.uniform(-3.0, 3.0),
            heart_rate_variability=45.0 + offset * 1.5 + rng.uniform(-5.0, 5.0),
            sleep_hours=7.5 + (offset % 3) * 0.5 + rng.uniform(-0.5, 0.5),
        ))
    return series
