"""Data models for the health sample store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# ---------------------------------------------------------------------------
# Sample type identifiers
# ---------------------------------------------------------------------------

STEP_COUNT = "step_count"
HEART_RATE_VARIABILITY_SDNN = "heart_rate_variability_sdnn"
RESTING_HEART_RATE = "resting_heart_rate"
VO2_MAX = "vo2_max"
SLEEP_ANALYSIS = "sleep_analysis"

QUANTITY_TYPES = frozenset({
    STEP_COUNT,
    HEART_RATE_VARIABILITY_SDNN,
    RESTING_HEART_RATE,
    VO2_MAX,
})
CATEGORY_TYPES = frozenset({SLEEP_ANALYSIS})
ALL_SAMPLE_TYPES = QUANTITY_TYPES | CATEGORY_TYPES

# Canonical unit per quantity type
QUANTITY_UNITS = {
    STEP_COUNT: "count",
    HEART_RATE_VARIABILITY_SDNN: "ms",
    RESTING_HEART_RATE: "count/min",
    VO2_MAX: "mL/kg*min",
}


class SleepValue(int, Enum):
    """Sleep analysis category values (HealthKit raw values)."""

    IN_BED = 0
    ASLEEP_UNSPECIFIED = 1
    AWAKE = 2
    ASLEEP_CORE = 3
    ASLEEP_DEEP = 4
    ASLEEP_REM = 5


ASLEEP_VALUES = frozenset({
    SleepValue.ASLEEP_UNSPECIFIED,
    SleepValue.ASLEEP_CORE,
    SleepValue.ASLEEP_DEEP,
    SleepValue.ASLEEP_REM,
})


class StatisticsOption(str, Enum):
    """Aggregation applied by :meth:`HealthSampleStore.statistics`."""

    CUMULATIVE_SUM = "cumulative_sum"
    DISCRETE_AVERAGE = "discrete_average"


@dataclass
class HealthSample:
    """A single stored sample, decrypted."""

    id: str
    sample_type: str
    kind: str  # 'quantity' | 'category'
    start_date: datetime
    end_date: datetime
    value: float
    unit: str = ""
    source_name: str = ""

    @property
    def duration_seconds(self) -> float:
        return (self.end_date - self.start_date).total_seconds()
