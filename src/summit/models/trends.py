"""Latest trend per (metric, timeframe) key."""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class StoredTrend(SQLModel, table=True):
    """Upserted on every refresh; holds only the most recent computation."""

    __table_args__ = (UniqueConstraint("metric", "timeframe"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    metric: str = Field(index=True)  # MetricKind value
    timeframe: str = Field(index=True)  # Timeframe value, e.g. "1W"

    baseline: float
    current_average: float
    percent_change: float
    direction: str  # "improving", "stable", "declining"
    detected_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
