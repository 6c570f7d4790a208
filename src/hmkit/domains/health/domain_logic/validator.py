"""Health metrics validator: hard physiological bounds plus advisory warnings.

Each present metric is classified valid or invalid against its hard bound.
Valid metrics may additionally produce a warning when they sit outside the
typical range; warnings never change validity. Validation never raises.
"""

from __future__ import annotations

from hmkit.domains.health.domain_logic import formatter
from hmkit.domains.health.domain_logic.metric_models import (
    HEART_RATE_VARIABILITY,
    MIN_VALID_METRICS,
    RESTING_HEART_RATE,
    SECONDS_PER_HOUR,
    SLEEP_DURATION,
    STEPS,
    VO2_MAX,
    HealthMetrics,
    ValidationResult,
)

# ---------------------------------------------------------------------------
# Advisory (soft) thresholds
# ---------------------------------------------------------------------------

STEPS_LOW = 1000
STEPS_HIGH = 50_000
HRV_LOW_MS = 10.0
RHR_LOW_BPM = 40.0
RHR_HIGH_BPM = 100.0
VO2_MAX_LOW = 20.0
SLEEP_LOW_HOURS = 6.0
SLEEP_HIGH_HOURS = 10.0


def _steps_warning(steps: int) -> str | None:
    if steps < STEPS_LOW:
        return "Step count is unusually low"
    if steps > STEPS_HIGH:
        return "Step count is unusually high"
    return None


def _hrv_warning(hrv: float) -> str | None:
    if hrv < HRV_LOW_MS:
        return "HRV is below typical healthy range"
    return None


def _rhr_warning(rhr: float) -> str | None:
    if rhr < RHR_LOW_BPM or rhr > RHR_HIGH_BPM:
        return "Resting heart rate is outside typical range"
    return None


def _vo2_max_warning(vo2_max: float) -> str | None:
    if vo2_max < VO2_MAX_LOW:
        return "VO₂Max indicates poor cardiovascular fitness"
    return None


def _sleep_warning(duration: float) -> str | None:
    hours = duration / SECONDS_PER_HOUR
    if hours < SLEEP_LOW_HOURS:
        return "Sleep duration is below recommended minimum"
    if hours > SLEEP_HIGH_HOURS:
        return "Sleep duration is above typical range"
    return None


# display name -> (hard-bound predicate, advisory check)
_CHECKS = {
    STEPS: (formatter.is_valid_step_count, _steps_warning),
    HEART_RATE_VARIABILITY: (formatter.is_valid_heart_rate_variability, _hrv_warning),
    RESTING_HEART_RATE: (formatter.is_valid_resting_heart_rate, _rhr_warning),
    VO2_MAX: (formatter.is_valid_vo2_max, _vo2_max_warning),
    SLEEP_DURATION: (formatter.is_valid_sleep_duration, _sleep_warning),
}


def validate_health_metrics(metrics: HealthMetrics) -> ValidationResult:
    """Classify each present metric and collect advisory warnings.

    A record is valid only when at least ``MIN_VALID_METRICS`` metrics are
    present and in range and none are out of range.
    """
    valid: list[str] = []
    invalid: list[str] = []
    warnings: list[str] = []

    for name, value in metrics.metric_values().items():
        if value is None:
            continue
        is_in_range, advisory = _CHECKS[name]
        if not is_in_range(value):
            invalid.append(name)
            continue
        valid.append(name)
        warning = advisory(value)
        if warning:
            warnings.append(warning)

    return ValidationResult(
        is_valid=len(valid) >= MIN_VALID_METRICS and not invalid,
        valid_metrics=valid,
        invalid_metrics=invalid,
        warnings=warnings,
    )
