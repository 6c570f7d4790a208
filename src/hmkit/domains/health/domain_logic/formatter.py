"""Display formatting and range predicates for individual health metrics.

Every ``format_*`` helper returns ``"N/A"`` for a missing value.
"""

from __future__ import annotations

from datetime import date, datetime

from hmkit.domains.health.domain_logic.metric_models import (
    HARD_BOUNDS,
    HEART_RATE_VARIABILITY,
    RESTING_HEART_RATE,
    SECONDS_PER_HOUR,
    SLEEP_DURATION,
    STEPS,
    VO2_MAX,
)

NOT_AVAILABLE = "N/A"


def format_steps(steps: int | None) -> str:
    """``10000`` -> ``"10,000 steps"``."""
    if steps is None:
        return NOT_AVAILABLE
    return f"{steps:,} steps"


def format_heart_rate_variability(hrv: float | None) -> str:
    """``45.23`` -> ``"45.2 ms"``."""
    if hrv is None:
        return NOT_AVAILABLE
    return f"{hrv:.1f} ms"


def format_resting_heart_rate(rhr: float | None) -> str:
    """``65.4`` -> ``"65 BPM"``."""
    if rhr is None:
        return NOT_AVAILABLE
    return f"{rhr:.0f} BPM"


def format_vo2_max(vo2_max: float | None) -> str:
    """``42.5`` -> ``"42.5 ml/kg/min"``."""
    if vo2_max is None:
        return NOT_AVAILABLE
    return f"{vo2_max:.1f} ml/kg/min"


def format_sleep_duration(duration: float | None) -> str:
    """Seconds to ``"8h 30m"`` (truncated to whole minutes)."""
    if duration is None:
        return NOT_AVAILABLE
    total = int(duration)
    hours = total // SECONDS_PER_HOUR
    minutes = total % SECONDS_PER_HOUR // 60
    return f"{hours}h {minutes}m"


def format_date(value: date | datetime) -> str:
    """Medium date style, e.g. ``"Jul 16, 2025"``."""
    return f"{value:%b} {value.day}, {value.year}"


# ---------------------------------------------------------------------------
# Hard-bound range predicates
# ---------------------------------------------------------------------------

def is_valid_step_count(steps: int) -> bool:
    return HARD_BOUNDS[STEPS].contains(steps)


def is_valid_heart_rate_variability(hrv: float) -> bool:
    return HARD_BOUNDS[HEART_RATE_VARIABILITY].contains(hrv)


def is_valid_resting_heart_rate(rhr: float) -> bool:
    return HARD_BOUNDS[RESTING_HEART_RATE].contains(rhr)


def is_valid_vo2_max(vo2_max: float) -> bool:
    return HARD_BOUNDS[VO2_MAX].contains(vo2_max)


def is_valid_sleep_duration(duration: float) -> bool:
    """``duration`` is in seconds; bounds are 1 to 16 hours."""
    return HARD_BOUNDS[SLEEP_DURATION].contains(duration / SECONDS_PER_HOUR)
