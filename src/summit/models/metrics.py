"""Daily wellness metrics table: one row per calendar day."""
from datetime import date, datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class DailyMetrics(SQLModel, table=True):
    """Raw daily readings as ingested from the data provider."""

    id: Optional[int] = Field(default=None, primary_key=True)
    record_date: date = Field(index=True, unique=True)

    body_battery: Optional[int] = None  # 0-100
    sleep_score: Optional[int] = None  # 0-100
    sleep_duration_seconds: Optional[int] = None
    deep_sleep_seconds: Optional[int] = None
    rem_sleep_seconds: Optional[int] = None
    stress_avg: Optional[int] = None  # 0-100
    resting_hr: Optional[int] = None
    hrv_avg: Optional[float] = None
    intensity_minutes: Optional[int] = None
    steps: Optional[int] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
