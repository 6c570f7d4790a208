"""Calendar helpers pinned to UTC and the proleptic Gregorian calendar.

Naive datetimes are treated as UTC so results never depend on the host's
timezone or locale.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone

logger = logging.getLogger(__name__)


def to_utc_date(day: date | datetime) -> date:
    """Return the UTC calendar date of ``day``."""
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(timezone.utc)
        return day.date()
    return day


def day_of_year(day: date | datetime) -> int:
    """Ordinal day of the UTC year (1-366); 1 if ``day`` has no calendar date."""
    try:
        return to_utc_date(day).timetuple().tm_yday
    except (AttributeError, OverflowError):
        logger.debug("Cannot resolve day-of-year for %r; using 1", day)
        return 1


def utc_day_bounds(day: date | datetime) -> tuple[datetime, datetime]:
    """``[start_of_day, start_of_next_day)`` in UTC."""
    start = datetime.combine(to_utc_date(day), time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def utc_start_of_day(day: date | datetime) -> datetime:
    return utc_day_bounds(day)[0]
