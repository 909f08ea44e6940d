"""
Multi-timeframe trend detection.

For one metric and one timeframe we compare where the metric started the
window with where it ended:
  1. Keep records whose day starts (UTC midnight) at or after
     reference time - timeframe days
  2. Pull the metric's readings, skipping missing days
  3. Split the readings into three equal chunks by position
  4. baseline = mean of the first chunk, current = mean of the last chunk
  5. percent change = (current - baseline) / baseline * 100
  6. Beyond ±10% the trend is improving or declining, otherwise stable

The middle chunk is never used: it separates baseline from current so the two
groups never share boundary days. The 10% threshold assumes this windowing.

For stress and resting HR a fall is good news, so the change is negated
before classification. The stored percent change keeps its raw sign.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from statistics import fmean
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from summit.analysis.metrics import (
    INVERTED_METRICS,
    MetricKind,
    MetricRecord,
    Timeframe,
    extract_values,
)

# Percent change needed to call a trend improving/declining
SIGNIFICANCE_THRESHOLD = 10.0

MIN_POINTS = 3


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass
class Trend:
    """Baseline-vs-current comparison for one (metric, timeframe) key."""
    metric: MetricKind
    timeframe: Timeframe
    baseline: float
    current_average: float
    percent_change: float        # raw sign: positive = metric went up
    direction: TrendDirection
    detected_at: datetime


def classify_direction(percent_change: float, metric: MetricKind) -> TrendDirection:
    """
    Map a raw percent change onto improving/stable/declining.

    +15% on steps is improving; +15% on resting HR is declining.
    """
    effective = -percent_change if metric in INVERTED_METRICS else percent_change
    if effective > SIGNIFICANCE_THRESHOLD:
        return TrendDirection.IMPROVING
    if effective < -SIGNIFICANCE_THRESHOLD:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def baseline_and_current(values: Sequence[float]) -> Optional[Tuple[float, float]]:
    """
    Means of the first and last thirds of values.

    Chunk length is len // 3, so with 10 values the first 3 form the baseline,
    the last 3 form the current group and the middle 4 are ignored.
    Returns None with fewer than MIN_POINTS values.
    """
    if len(values) < MIN_POINTS:
        return None
    third = len(values) // 3
    return fmean(values[:third]), fmean(values[-third:])


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time(), tzinfo=timezone.utc)


def analyze(
    history: Iterable[MetricRecord],
    metric: Union[MetricKind, str],
    timeframe: Union[Timeframe, str],
    now: Optional[datetime] = None,
) -> Optional[Trend]:
    """
    Calculate the trend for a single metric/timeframe combination.

    Args:
        history: MetricRecords ordered by date (not re-sorted here).
        metric: MetricKind or its string value.
        timeframe: Timeframe or its string value.
        now: reference time for the window and detected_at. Defaults to
             the current UTC time; pass it explicitly for repeatable results.

    Returns:
        Trend, or None when the window holds fewer than 3 readings, the
        baseline average is zero or the change is not a finite number.

    Raises:
        ValueError: metric or timeframe is not a known enum value.
    """
    metric = MetricKind(metric)
    timeframe = Timeframe(timeframe)
    reference = now or datetime.now(timezone.utc)
    cutoff = _as_utc(reference) - timedelta(days=timeframe.days)

    in_window = [r for r in history if _day_start(r.date) >= cutoff]
    groups = baseline_and_current(extract_values(in_window, metric))
    if groups is None:
        return None

    baseline, current = groups
    if baseline == 0:
        return None

    percent_change = (current - baseline) / baseline * 100
    if not math.isfinite(percent_change):
        return None

    return Trend(
        metric=metric,
        timeframe=timeframe,
        baseline=baseline,
        current_average=current,
        percent_change=percent_change,
        direction=classify_direction(percent_change, metric),
        detected_at=reference,
    )


def analyze_timeframes(
    history: Sequence[MetricRecord],
    metric: Union[MetricKind, str],
    now: Optional[datetime] = None,
) -> List[Trend]:
    """Trends for one metric across every timeframe, skipping insufficient data."""
    reference = now or datetime.now(timezone.utc)
    trends = []
    for timeframe in Timeframe:
        trend = analyze(history, metric, timeframe, now=reference)
        if trend is not None:
            trends.append(trend)
    return trends


def analyze_all(
    history: Sequence[MetricRecord],
    now: Optional[datetime] = None,
    metrics: Optional[Iterable[Union[MetricKind, str]]] = None,
) -> List[Trend]:
    """
    Full metric × timeframe matrix (10 × 6 by default).

    Every combination is independent; a key without enough data simply has
    no entry in the result.
    """
    reference = now or datetime.now(timezone.utc)
    trends: List[Trend] = []
    for metric in (metrics if metrics is not None else MetricKind):
        trends.extend(analyze_timeframes(history, metric, now=reference))
    return trends
