"""Tests for the deterministic day-of-year generator and the injection series."""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta, timezone

import pytest

from hmkit.domains.health.connectors.mock_data import (
    INJECTION_DAYS,
    generate_injection_series,
    generate_mock_health_metrics,
)
from hmkit.domains.health.domain_logic.metric_models import (
    GENERATION_RULES,
    HEART_RATE_VARIABILITY,
    RESTING_HEART_RATE,
    SLEEP_DURATION,
    STEPS,
    VO2_MAX,
)

EPS = 1e-9


class TestDeterminism:
    def test_same_date_same_record(self):
        d = date(2025, 7, 16)
        assert generate_mock_health_metrics(d) == generate_mock_health_metrics(d)

    def test_time_of_day_does_not_matter(self):
        morning = datetime(2025, 7, 16, 0, 5, tzinfo=timezone.utc)
        night = datetime(2025, 7, 16, 23, 55, tzinfo=timezone.utc)
        assert generate_mock_health_metrics(morning) == generate_mock_health_metrics(night)

    def test_date_and_datetime_agree(self):
        assert generate_mock_health_metrics(date(2025, 3, 1)) == generate_mock_health_metrics(
            datetime(2025, 3, 1, 9, 30)
        )

    def test_timezone_normalized_to_utc(self):
        # 23:30 at UTC-5 on Jul 16 is 04:30 UTC on Jul 17.
        eastern = timezone(timedelta(hours=-5))
        local = datetime(2025, 7, 16, 23, 30, tzinfo=eastern)
        assert generate_mock_health_metrics(local) == generate_mock_health_metrics(
            date(2025, 7, 17)
        )

    def test_same_day_of_year_across_years(self):
        a = generate_mock_health_metrics(date(2023, 2, 10))
        b = generate_mock_health_metrics(date(2025, 2, 10))
        assert a.steps == b.steps
        assert a.vo2_max == b.vo2_max

    def test_adjacent_days_differ(self):
        start = date(2025, 1, 1)
        for offset in range(60):
            d = start + timedelta(days=offset)
            today = generate_mock_health_metrics(d)
            tomorrow = generate_mock_health_metrics(d + timedelta(days=1))
            assert today.steps != tomorrow.steps

    def test_record_date_is_utc_start_of_day(self):
        metrics = generate_mock_health_metrics(datetime(2025, 7, 16, 15, 0, tzinfo=timezone.utc))
        assert metrics.date == datetime(2025, 7, 16, tzinfo=timezone.utc)


class TestKnownValues:
    def test_first_day_of_year(self):
        # seed 1
        m = generate_mock_health_metrics(date(2025, 1, 1))
        assert m.steps == 8050
        assert m.heart_rate_variability == pytest.approx(30.8)
        assert m.resting_heart_rate == pytest.approx(56.2)
        assert m.vo2_max == pytest.approx(36.5)
        assert m.sleep_duration == pytest.approx(6.8 * 3600)

    def test_day_100_wraps_step_modulo(self):
        # Apr 10, 2025 is day 100: 100 % 100 == 0
        m = generate_mock_health_metrics(date(2025, 4, 10))
        assert m.steps == 8000
        assert m.heart_rate_variability == pytest.approx(30.0)
        assert m.resting_heart_rate == pytest.approx(55.0)
        assert m.vo2_max == pytest.approx(35.0)
        assert m.sleep_duration == pytest.approx(6.5 * 3600)

    def test_leap_day_of_year_366(self):
        m = generate_mock_health_metrics(date(2024, 12, 31))
        assert m.steps == 8000 + (366 % 100) * 50


class TestRangesAndCompleteness:
    @pytest.mark.parametrize("offset", range(0, 366, 7))
    def test_values_within_generation_ranges(self, offset):
        m = generate_mock_health_metrics(date(2024, 1, 1) + timedelta(days=offset))
        checks = {
            STEPS: m.steps,
            HEART_RATE_VARIABILITY: m.heart_rate_variability,
            RESTING_HEART_RATE: m.resting_heart_rate,
            VO2_MAX: m.vo2_max,
            SLEEP_DURATION: m.sleep_duration / 3600,
        }
        for name, value in checks.items():
            rng = GENERATION_RULES[name].range
            assert rng.low - EPS <= value <= rng.high + EPS, name

    def test_documented_range_edges(self):
        assert GENERATION_RULES[STEPS].range.high == 12950
        assert GENERATION_RULES[HEART_RATE_VARIABILITY].range.high == pytest.approx(69.2)
        assert GENERATION_RULES[RESTING_HEART_RATE].range.high == pytest.approx(83.8)
        assert GENERATION_RULES[VO2_MAX].range.high == pytest.approx(63.5)
        assert GENERATION_RULES[SLEEP_DURATION].range.high == pytest.approx(9.2)

    def test_always_complete(self):
        for offset in range(0, 366, 13):
            m = generate_mock_health_metrics(date(2025, 1, 1) + timedelta(days=offset))
            assert m.is_complete
            assert isinstance(m.steps, int)


class TestInjectionSeries:
    def test_seven_days_back_from_today(self):
        today = datetime(2025, 7, 16, 14, 0, tzinfo=timezone.utc)
        series = generate_injection_series(today, random.Random(1))
        assert len(series) == INJECTION_DAYS
        assert [d.day_offset for d in series] == list(range(7))
        assert series[0].start_of_day == datetime(2025, 7, 16, tzinfo=timezone.utc)
        assert series[-1].start_of_day == datetime(2025, 7, 10, tzinfo=timezone.utc)

    def test_values_stay_within_trend_and_jitter(self):
        series = generate_injection_series(date(2025, 7, 16), random.Random(42))
        for d in series:
            o = d.day_offset
            assert abs(d.steps - (8000 + 1200 * o)) <= 500
            assert abs(d.vo2_max - (42.0 + 0.3 * o)) <= 1.0 + EPS
            assert abs(d.resting_heart_rate - (65.0 - 0.5 * o)) <= 3.0 + EPS
            assert abs(d.heart_rate_variability - (45.0 + 1.5 * o)) <= 5.0 + EPS
            assert abs(d.sleep_hours - (7.5 + 0.5 * (o % 3))) <= 0.5 + EPS

    def test_seeded_rng_is_reproducible(self):
        a = generate_injection_series(date(2025, 7, 16), random.Random(7))
        b = generate_injection_series(date(2025, 7, 16), random.Random(7))
        assert a == b
