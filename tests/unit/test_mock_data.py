"""Tests for the synthetic history generator."""
import random
from datetime import date, datetime, timedelta, timezone

import pytest

from summit.analysis.metrics import MetricKind, Timeframe
from summit.analysis.trends import TrendDirection, analyze
from summit.demo.mock_data import (
    SCENARIOS,
    Shift,
    UserProfile,
    generate_mock_data,
    generate_scenario,
    shift_effect,
)

END = date(2026, 3, 10)


class TestShiftEffect:
    def test_before_shift_starts(self):
        assert shift_effect(Shift("stress", 10, 20), days_ago=15) == 0.0

    def test_gradual_ramps_linearly(self):
        shift = Shift("stress", 20, 10)
        assert shift_effect(shift, days_ago=20) == pytest.approx(0.0)
        assert shift_effect(shift, days_ago=10) == pytest.approx(5.0)
        assert shift_effect(shift, days_ago=0) == pytest.approx(10.0)

    def test_sudden_applies_fully(self):
        shift = Shift("hrv", 10, -18, sudden=True)
        assert shift_effect(shift, days_ago=10) == -18
        assert shift_effect(shift, days_ago=3) == -18


class TestGenerateMockData:
    def test_one_record_per_day_oldest_first(self):
        records = generate_mock_data(days=30, end=END, rng=random.Random(1))
        assert len(records) == 30
        assert records[-1].date == END
        assert records[0].date == END - timedelta(days=29)
        dates = [r.date for r in records]
        assert dates == sorted(dates)
        assert len(set(dates)) == 30

    def test_seeded_output_is_reproducible(self):
        a = generate_mock_data(days=20, end=END, rng=random.Random(42))
        b = generate_mock_data(days=20, end=END, rng=random.Random(42))
        assert a == b

    def test_values_within_realistic_ranges(self):
        records = generate_mock_data(days=120, end=END, rng=random.Random(7))
        for r in records:
            assert 5 <= r.body_battery <= 100
            assert 20 <= r.sleep_score <= 100
            assert 3600 <= r.sleep_duration_seconds <= 36000
            assert 0 <= r.deep_sleep_seconds <= r.sleep_duration_seconds * 0.4
            assert 0 <= r.rem_sleep_seconds <= r.sleep_duration_seconds * 0.35
            assert 5 <= r.stress_avg <= 95
            assert 40 <= r.resting_hr <= 100
            assert 15 <= r.hrv_avg <= 150
            assert 0 <= r.intensity_minutes <= 180
            assert 500 <= r.steps <= 30000

    def test_weekday_stress_stays_within_variance(self):
        flat = UserProfile(stress=40)
        records = generate_mock_data(days=14, profile=flat, shifts=[], end=END, rng=random.Random(3))
        weekday = [r.stress_avg for r in records if r.date.weekday() < 5]
        # ±20% variance around 40
        assert all(32 <= s <= 48 for s in weekday)


class TestScenarios:
    def test_available_scenarios(self):
        assert set(SCENARIOS) == {"healthy", "burnout", "recovery", "training_ramp", "acute_stress"}

    @pytest.mark.parametrize("name,days", [
        ("healthy", 180),
        ("burnout", 180),
        ("acute_stress", 90),
    ])
    def test_scenario_lengths(self, name, days):
        assert len(generate_scenario(name, end=END, seed=1)) == days

    def test_unknown_scenario_raises(self):
        with pytest.raises(KeyError):
            generate_scenario("marathon", end=END)

    def test_acute_stress_shows_declining_body_battery(self):
        records = generate_scenario("acute_stress", end=END, seed=11)
        now = datetime(END.year, END.month, END.day, 9, 0, tzinfo=timezone.utc)
        trend = analyze(records, MetricKind.BODY_BATTERY, Timeframe.ONE_MONTH, now=now)
        # 65 → 40 sudden drop over the final 10 days
        assert trend.direction == TrendDirection.DECLINING
        assert trend.percent_change < -25
