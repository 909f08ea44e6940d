"""Tests for MetricRecord, enums, field extraction and dict conversion."""
import math
from dataclasses import FrozenInstanceError, fields
from datetime import date

import pytest

from summit.analysis.metrics import (
    INVERTED_METRICS,
    METRIC_FIELDS,
    TIMEFRAME_DAYS,
    MetricKind,
    MetricRecord,
    Timeframe,
    extract_values,
    metric_value,
    records_from_dicts,
)


class TestMetricRecord:
    def test_required_field_only(self):
        rec = MetricRecord(date=date(2026, 1, 5))
        assert rec.date == date(2026, 1, 5)
        assert rec.body_battery is None
        assert rec.hrv_avg is None
        assert rec.steps is None

    def test_is_immutable(self):
        rec = MetricRecord(date=date(2026, 1, 5), steps=9000)
        with pytest.raises(FrozenInstanceError):
            rec.steps = 10


class TestEnums:
    def test_ten_metric_kinds(self):
        assert len(MetricKind) == 10

    def test_every_metric_maps_to_a_record_field(self):
        record_fields = {f.name for f in fields(MetricRecord)}
        assert set(METRIC_FIELDS) == set(MetricKind)
        assert set(METRIC_FIELDS.values()) <= record_fields

    @pytest.mark.parametrize("timeframe,days", [
        ("1W", 7), ("2W", 14), ("1M", 30), ("3M", 90), ("6M", 180), ("1Y", 365),
    ])
    def test_timeframe_days(self, timeframe, days):
        assert Timeframe(timeframe).days == days

    def test_timeframe_table_is_exhaustive(self):
        assert set(TIMEFRAME_DAYS) == set(Timeframe)

    def test_inverted_metrics(self):
        assert INVERTED_METRICS == {MetricKind.STRESS, MetricKind.RESTING_HR}

    def test_unknown_values_fail_fast(self):
        with pytest.raises(ValueError):
            MetricKind("vo2max")
        with pytest.raises(ValueError):
            Timeframe("2Y")


class TestExtraction:
    def test_metric_value_reads_mapped_field(self):
        rec = MetricRecord(date=date(2026, 1, 5), sleep_duration_seconds=27000)
        assert metric_value(rec, MetricKind.SLEEP_DURATION) == 27000

    def test_absent_and_non_finite_are_dropped(self):
        records = [
            MetricRecord(date=date(2026, 1, 1), hrv_avg=50.0),
            MetricRecord(date=date(2026, 1, 2), hrv_avg=None),
            MetricRecord(date=date(2026, 1, 3), hrv_avg=math.nan),
            MetricRecord(date=date(2026, 1, 4), hrv_avg=math.inf),
            MetricRecord(date=date(2026, 1, 5), hrv_avg=0.0),
        ]
        assert extract_values(records, MetricKind.HRV) == [50.0, 0.0]

    def test_zero_is_a_reading_not_missing(self):
        rec = MetricRecord(date=date(2026, 1, 5), steps=0)
        assert metric_value(rec, MetricKind.STEPS) == 0

    def test_preserves_order(self):
        records = [MetricRecord(date=date(2026, 1, d), steps=d * 100) for d in (3, 1, 2)]
        assert extract_values(records, MetricKind.STEPS) == [300, 100, 200]


class TestRecordsFromDicts:
    def test_converts_rows_and_ignores_extra_keys(self):
        rows = [
            {"id": 7, "date": date(2026, 2, 1), "body_battery": 64, "steps": 8100},
            {"date": "2026-02-02", "sleep_score": 71, "created_at": "whatever"},
        ]
        result = records_from_dicts(rows)
        assert len(result) == 2
        assert result[0].body_battery == 64
        assert result[0].sleep_score is None
        assert result[1].date == date(2026, 2, 2)
        assert result[1].sleep_score == 71

    def test_empty_list(self):
        assert records_from_dicts([]) == []
