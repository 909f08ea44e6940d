"""Derived per-day Vital Score table."""
from datetime import date, datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class DailyVitalScore(SQLModel, table=True):
    """One computed score per day. Recomputing replaces every column."""

    id: Optional[int] = Field(default=None, primary_key=True)
    score_date: date = Field(index=True, unique=True)

    score: int
    sleep_component: int
    recovery_component: int
    strain_component: int
    recommendation: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
