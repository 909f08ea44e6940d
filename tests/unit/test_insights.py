"""Tests for trend explanations and significant-shift ranking."""
from datetime import datetime, timedelta, timezone

import pytest

from summit.analysis.insights import (
    GUIDANCE,
    METRIC_LABELS,
    STABLE_ACTIONS,
    STABLE_RATIONALE,
    TIMEFRAME_PHRASES,
    TrendInsight,
    explain,
    significant_shifts,
)
from summit.analysis.metrics import MetricKind, MetricRecord, Timeframe
from summit.analysis.trends import Trend, TrendDirection, analyze

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def make_trend(
    metric: MetricKind = MetricKind.SLEEP_SCORE,
    percent_change: float = -20.0,
    direction: TrendDirection = TrendDirection.DECLINING,
    timeframe: Timeframe = Timeframe.ONE_MONTH,
) -> Trend:
    baseline = 100.0
    return Trend(
        metric=metric,
        timeframe=timeframe,
        baseline=baseline,
        current_average=baseline * (1 + percent_change / 100),
        percent_change=percent_change,
        direction=direction,
        detected_at=NOW,
    )


class TestLookupTablesAreExhaustive:
    def test_every_metric_has_a_label(self):
        assert set(METRIC_LABELS) == set(MetricKind)

    def test_every_timeframe_has_a_phrase(self):
        assert set(TIMEFRAME_PHRASES) == set(Timeframe)

    def test_guidance_covers_every_metric_for_both_directions(self):
        assert set(GUIDANCE) == set(MetricKind)
        for metric, by_direction in GUIDANCE.items():
            assert set(by_direction) == {TrendDirection.IMPROVING, TrendDirection.DECLINING}, metric

    def test_twenty_distinct_rationales(self):
        rationales = [
            rationale
            for by_direction in GUIDANCE.values()
            for rationale, _ in by_direction.values()
        ]
        assert len(rationales) == 20
        assert len(set(rationales)) == 20

    @pytest.mark.parametrize("metric", list(MetricKind))
    def test_three_or_four_actions_per_entry(self, metric):
        for direction, (_, actions) in GUIDANCE[metric].items():
            assert 3 <= len(actions) <= 4, (metric, direction)
            assert len(set(actions)) == len(actions)

    @pytest.mark.parametrize("metric", list(MetricKind))
    def test_declining_actions_are_specific(self, metric):
        _, declining = GUIDANCE[metric][TrendDirection.DECLINING]
        assert STABLE_ACTIONS[0] not in declining


class TestExplain:
    def test_summary_for_declining_sleep(self):
        insight = explain(make_trend(percent_change=-28.571428, timeframe=Timeframe.TWO_WEEKS))
        assert insight.summary == "Your sleep quality has decreased 29% over the past 2 weeks."

    def test_sleep_decline_gets_sleep_hygiene_actions(self):
        insight = explain(make_trend())
        assert insight.rationale == "Reduced sleep quality impacts recovery, mood, and long-term health."
        assert insight.actions == [
            "Set a consistent bedtime",
            "Reduce screen time 1 hour before bed",
            "Check bedroom temperature (65-68°F ideal)",
            "Limit caffeine after 2pm",
        ]

    def test_inverted_metric_wording_follows_raw_sign(self):
        trend = make_trend(
            metric=MetricKind.RESTING_HR,
            percent_change=15.2,
            direction=TrendDirection.DECLINING,
        )
        insight = explain(trend)
        assert insight.summary == "Your resting heart rate has increased 15% over the past month."
        assert insight.rationale == GUIDANCE[MetricKind.RESTING_HR][TrendDirection.DECLINING][0]

    def test_falling_stress_reads_decreased_but_improving(self):
        trend = make_trend(
            metric=MetricKind.STRESS,
            percent_change=-25.0,
            direction=TrendDirection.IMPROVING,
            timeframe=Timeframe.ONE_YEAR,
        )
        insight = explain(trend)
        assert insight.summary == "Your stress levels has decreased 25% over the past year."
        assert insight.rationale == GUIDANCE[MetricKind.STRESS][TrendDirection.IMPROVING][0]
        assert len(insight.actions) == 3

    @pytest.mark.parametrize("metric", list(MetricKind))
    def test_stable_is_the_same_for_every_metric(self, metric):
        insight = explain(make_trend(metric=metric, percent_change=4.0, direction=TrendDirection.STABLE))
        assert insight.rationale == STABLE_RATIONALE
        assert insight.actions == ["Keep doing what you're doing - it's working."]

    def test_zero_change_reads_decreased(self):
        insight = explain(make_trend(percent_change=0.0, direction=TrendDirection.STABLE))
        assert "has decreased 0% over" in insight.summary

    def test_half_percent_rounds_up(self):
        insight = explain(make_trend(percent_change=12.5, direction=TrendDirection.IMPROVING))
        assert "increased 13%" in insight.summary

    def test_carries_trend_identity(self):
        trend = make_trend(metric=MetricKind.STEPS, timeframe=Timeframe.SIX_MONTHS)
        insight = explain(trend)
        assert insight.metric == MetricKind.STEPS
        assert insight.timeframe == Timeframe.SIX_MONTHS
        assert insight.percent_change == trend.percent_change
        assert insight.direction == trend.direction

    def test_actions_are_a_fresh_list(self):
        first = explain(make_trend())
        first.actions.append("mutated")
        assert "mutated" not in explain(make_trend()).actions


class TestSignificantShifts:
    def test_only_declining_beyond_threshold(self):
        trends = [
            make_trend(MetricKind.STEPS, 25.0, TrendDirection.IMPROVING),
            make_trend(MetricKind.HRV, -5.0, TrendDirection.STABLE),
            make_trend(MetricKind.SLEEP_SCORE, -10.0, TrendDirection.DECLINING),
            make_trend(MetricKind.DEEP_SLEEP, -18.0, TrendDirection.DECLINING),
            make_trend(MetricKind.STRESS, 30.0, TrendDirection.DECLINING),
        ]
        result = significant_shifts(trends)
        assert [i.metric for i in result] == [MetricKind.STRESS, MetricKind.DEEP_SLEEP]
        assert all(isinstance(i, TrendInsight) for i in result)
        assert all(i.direction == TrendDirection.DECLINING for i in result)
        assert all(abs(i.percent_change) > 10 for i in result)

    def test_sorted_by_magnitude_descending(self):
        trends = [
            make_trend(MetricKind.STEPS, -12.0),
            make_trend(MetricKind.HRV, -40.0),
            make_trend(MetricKind.RESTING_HR, 22.0),
            make_trend(MetricKind.BODY_BATTERY, -15.5),
        ]
        magnitudes = [abs(i.percent_change) for i in significant_shifts(trends)]
        assert magnitudes == [40.0, 22.0, 15.5, 12.0]

    def test_ties_keep_input_order(self):
        trends = [
            make_trend(MetricKind.STEPS, -20.0),
            make_trend(MetricKind.HRV, -20.0),
            make_trend(MetricKind.REM_SLEEP, -20.0),
        ]
        result = significant_shifts(trends)
        assert [i.metric for i in result] == [MetricKind.STEPS, MetricKind.HRV, MetricKind.REM_SLEEP]

    def test_empty(self):
        assert significant_shifts([]) == []

    def test_accepts_any_iterable(self):
        result = significant_shifts(t for t in [make_trend(percent_change=-30.0)])
        assert len(result) == 1

    def test_end_to_end_sleep_decline(self):
        start = NOW.date() - timedelta(days=8)
        history = [
            MetricRecord(date=start + timedelta(days=i), sleep_score=v)
            for i, v in enumerate([70, 70, 70, 70, 70, 70, 50, 50, 50])
        ]
        trend = analyze(history, MetricKind.SLEEP_SCORE, Timeframe.TWO_WEEKS, now=NOW)
        result = significant_shifts([trend])
        assert len(result) == 1
        assert "decreased 29%" in result[0].summary
