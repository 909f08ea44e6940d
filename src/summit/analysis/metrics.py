"""
MetricRecord dataclass, metric/timeframe enums and field extraction.

MetricRecord is the in-memory representation every analysis module works on.
It is a plain frozen dataclass with no SQLModel or DB dependency. Persistence
rows are converted with records_from_dicts() before analysis.
"""
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class MetricKind(str, Enum):
    BODY_BATTERY = "body_battery"
    SLEEP_SCORE = "sleep_score"
    SLEEP_DURATION = "sleep_duration"
    DEEP_SLEEP = "deep_sleep"
    REM_SLEEP = "rem_sleep"
    STRESS = "stress"
    RESTING_HR = "resting_hr"
    HRV = "hrv"
    INTENSITY_MINUTES = "intensity_minutes"
    STEPS = "steps"


class Timeframe(str, Enum):
    ONE_WEEK = "1W"
    TWO_WEEKS = "2W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"

    @property
    def days(self) -> int:
        return TIMEFRAME_DAYS[self]


TIMEFRAME_DAYS: Dict[Timeframe, int] = {
    Timeframe.ONE_WEEK: 7,
    Timeframe.TWO_WEEKS: 14,
    Timeframe.ONE_MONTH: 30,
    Timeframe.THREE_MONTHS: 90,
    Timeframe.SIX_MONTHS: 180,
    Timeframe.ONE_YEAR: 365,
}


@dataclass(frozen=True)
class MetricRecord:
    """
    One calendar day of wellness observations.
    Every field except date is optional: None means "not recorded", never zero.
    """

    date: date
    body_battery: Optional[int] = None             # energy reserve, 0-100
    sleep_score: Optional[int] = None              # 0-100
    sleep_duration_seconds: Optional[int] = None
    deep_sleep_seconds: Optional[int] = None
    rem_sleep_seconds: Optional[int] = None
    stress_avg: Optional[int] = None               # 0-100
    resting_hr: Optional[int] = None               # bpm
    hrv_avg: Optional[float] = None                # ms
    intensity_minutes: Optional[int] = None
    steps: Optional[int] = None


METRIC_FIELDS: Dict[MetricKind, str] = {
    MetricKind.BODY_BATTERY: "body_battery",
    MetricKind.SLEEP_SCORE: "sleep_score",
    MetricKind.SLEEP_DURATION: "sleep_duration_seconds",
    MetricKind.DEEP_SLEEP: "deep_sleep_seconds",
    MetricKind.REM_SLEEP: "rem_sleep_seconds",
    MetricKind.STRESS: "stress_avg",
    MetricKind.RESTING_HR: "resting_hr",
    MetricKind.HRV: "hrv_avg",
    MetricKind.INTENSITY_MINUTES: "intensity_minutes",
    MetricKind.STEPS: "steps",
}

# Lower is better for these
INVERTED_METRICS = frozenset({MetricKind.STRESS, MetricKind.RESTING_HR})

_VALUE_FIELDS = tuple(METRIC_FIELDS.values())


def is_present(value: Optional[float]) -> bool:
    """True for a usable reading: not None and, for floats, finite."""
    if value is None:
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return True


def metric_value(record: MetricRecord, metric: MetricKind) -> Optional[float]:
    """Return the reading for metric on this day, or None if absent/non-finite."""
    value = getattr(record, METRIC_FIELDS[metric])
    return value if is_present(value) else None


def extract_values(records: Iterable[MetricRecord], metric: MetricKind) -> List[float]:
    """Values for metric in record order, absent readings dropped."""
    values = []
    for record in records:
        value = metric_value(record, metric)
        if value is not None:
            values.append(value)
    return values


def records_from_dicts(rows: Iterable[Dict[str, Any]]) -> List[MetricRecord]:
    """
    Convert plain dicts (DB rows via model_dump(), parsed JSON) into
    MetricRecord instances. Unknown keys (id, created_at, ...) are ignored and
    an ISO string date is accepted.
    """
    records = []
    for row in rows:
        day = row["date"]
        if isinstance(day, str):
            day = date.fromisoformat(day)
        records.append(
            MetricRecord(date=day, **{f: row.get(f) for f in _VALUE_FIELDS})
        )
    return records
