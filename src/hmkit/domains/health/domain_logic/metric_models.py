"""Daily health metric models and domain constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

SECONDS_PER_HOUR = 3600

# Display names, in validation/report order
STEPS = "Steps"
HEART_RATE_VARIABILITY = "Heart Rate Variability"
RESTING_HEART_RATE = "Resting Heart Rate"
VO2_MAX = "VO₂Max"
SLEEP_DURATION = "Sleep Duration"

METRIC_NAMES = [STEPS, HEART_RATE_VARIABILITY, RESTING_HEART_RATE, VO2_MAX, SLEEP_DURATION]

# Product rule: a record needs this many in-range metrics to count as valid.
MIN_VALID_METRICS = 3


@dataclass(frozen=True)
class MetricRange:
    """Inclusive bounds for one metric."""

    low: float
    high: float

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


# Hard physiological bounds; outside these a value is invalid.
# Sleep is expressed in hours.
HARD_BOUNDS = {
    STEPS: MetricRange(0, 100_000),
    HEART_RATE_VARIABILITY: MetricRange(1.0, 200.0),
    RESTING_HEART_RATE: MetricRange(30.0, 120.0),
    VO2_MAX: MetricRange(10.0, 90.0),
    SLEEP_DURATION: MetricRange(1.0, 16.0),
}


@dataclass(frozen=True)
class GenerationRule:
    """``base + (seed % modulo) * step`` for the deterministic generator."""

    base: float
    modulo: int
    step: float

    def value(self, seed: int) -> float:
        return self.base + (seed % self.modulo) * self.step

    @property
    def range(self) -> MetricRange:
        return MetricRange(self.base, self.base + (self.modulo - 1) * self.step)


# Sleep rule is in hours; the generator converts to seconds.
GENERATION_RULES = {
    STEPS: GenerationRule(base=8000, modulo=100, step=50),
    HEART_RATE_VARIABILITY: GenerationRule(base=30.0, modulo=50, step=0.8),
    RESTING_HEART_RATE: GenerationRule(base=55.0, modulo=25, step=1.2),
    VO2_MAX: GenerationRule(base=35.0, modulo=20, step=1.5),
    SLEEP_DURATION: GenerationRule(base=6.5, modulo=10, step=0.3),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthMetrics:
    """One day of health metrics. Every metric is independently optional."""

    steps: int | None = None
    heart_rate_variability: float | None = None   # ms
    resting_heart_rate: float | None = None       # bpm
    vo2_max: float | None = None                  # ml/kg/min
    sleep_duration: float | None = None           # seconds
    date: datetime = field(default_factory=_utc_now)

    def metric_values(self) -> dict[str, float | int | None]:
        """Return metric values keyed by display name, in METRIC_NAMES order."""
        return {
            STEPS: self.steps,
            HEART_RATE_VARIABILITY: self.heart_rate_variability,
            RESTING_HEART_RATE: self.resting_heart_rate,
            VO2_MAX: self.vo2_max,
            SLEEP_DURATION: self.sleep_duration,
        }

    @property
    def completed_metrics_count(self) -> int:
        return sum(1 for v in self.metric_values().values() if v is not None)

    @property
    def is_complete(self) -> bool:
        return self.completed_metrics_count == len(METRIC_NAMES)

    @property
    def completion_percentage(self) -> float:
        return self.completed_metrics_count / len(METRIC_NAMES)

    @property
    def formatted_sleep_duration(self) -> str:
        from hmkit.domains.health.domain_logic.formatter import format_sleep_duration

        return format_sleep_duration(self.sleep_duration)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "steps": self.steps,
            "heart_rate_variability_ms": self.heart_rate_variability,
            "resting_heart_rate_bpm": self.resting_heart_rate,
            "vo2_max_ml_kg_min": self.vo2_max,
            "sleep_duration_seconds": self.sleep_duration,
            "completed_metrics": self.completed_metrics_count,
            "is_complete": self.is_complete,
        }

    def __str__(self) -> str:
        from hmkit.domains.health.domain_logic import formatter

        return "\n".join([
            f"HealthMetrics for {formatter.format_date(self.date)}:",
            f"• Steps: {formatter.format_steps(self.steps)}",
            f"• Heart Rate Variability: "
            f"{formatter.format_heart_rate_variability(self.heart_rate_variability)}",
            f"• Resting Heart Rate: {formatter.format_resting_heart_rate(self.resting_heart_rate)}",
            f"• VO₂Max: {formatter.format_vo2_max(self.vo2_max)}",
            f"• Sleep Duration: {self.formatted_sleep_duration}",
        ])


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one HealthMetrics record."""

    is_valid: bool
    valid_metrics: list[str] = field(default_factory=list)
    invalid_metrics: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "valid_metrics": list(self.valid_metrics),
            "invalid_metrics": list(self.invalid_metrics),
            "warnings": list(self.warnings),
        }
