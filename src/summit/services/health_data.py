"""
HealthDataService: moves data between the DB and the pure analysis core.

Flow for a full refresh:
  1. import_metrics(): upsert DailyMetrics rows keyed by date
  2. recompute_scores(): compute_score() per day → upsert DailyVitalScore
  3. refresh_trends(): analyze_all() over the full history → upsert StoredTrend
     keyed by (metric, timeframe)

Read helpers (dashboard, trend_view, score_history) convert rows back into
the analysis dataclasses so callers never handle SQLModel rows directly.

A key whose window no longer has enough data keeps its previously stored
trend; refresh never deletes rows.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional, Union

from sqlalchemy import delete, func
from sqlmodel import Session, select

from summit.analysis.insights import TrendInsight, significant_shifts
from summit.analysis.metrics import (
    METRIC_FIELDS,
    MetricKind,
    MetricRecord,
    Timeframe,
    records_from_dicts,
)
from summit.analysis.trends import Trend, TrendDirection, analyze_all
from summit.analysis.vital_score import DEFAULT_WEIGHTS, ScoreWeights, VitalScore, compute_score
from summit.demo.mock_data import generate_scenario
from summit.models.metrics import DailyMetrics
from summit.models.scores import DailyVitalScore
from summit.models.trends import StoredTrend

logger = logging.getLogger(__name__)

_VALUE_FIELDS = tuple(METRIC_FIELDS.values())


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class Dashboard:
    """Today's view: latest score, last week of metrics, urgent insights."""
    today_score: Optional[VitalScore]
    recent_metrics: List[MetricRecord] = field(default_factory=list)
    active_insights: List[TrendInsight] = field(default_factory=list)


@dataclass
class TrendView:
    timeframe: Timeframe
    metrics: List[MetricRecord] = field(default_factory=list)
    trends: List[Trend] = field(default_factory=list)
    insights: List[TrendInsight] = field(default_factory=list)


# ─── Row ↔ dataclass conversion ────────────────────────────────────────────────

def record_from_row(row: DailyMetrics) -> MetricRecord:
    data = row.model_dump()
    data["date"] = row.record_date
    return records_from_dicts([data])[0]


def score_from_row(row: DailyVitalScore) -> VitalScore:
    return VitalScore(
        date=row.score_date,
        score=row.score,
        sleep_component=row.sleep_component,
        recovery_component=row.recovery_component,
        strain_component=row.strain_component,
        recommendation=row.recommendation or "",
    )


def trend_from_row(row: StoredTrend) -> Trend:
    return Trend(
        metric=MetricKind(row.metric),
        timeframe=Timeframe(row.timeframe),
        baseline=row.baseline,
        current_average=row.current_average,
        percent_change=row.percent_change,
        direction=TrendDirection(row.direction),
        detected_at=row.detected_at,
    )


class HealthDataService:
    """Persistence-facing orchestrator around the analysis functions."""

    def __init__(self, session: Session, weights: Optional[ScoreWeights] = None):
        """
        Args:
            session: open SQLModel session (caller owns its lifetime).
            weights: Vital Score blend weights; DEFAULT_WEIGHTS if None.
        """
        self.session = session
        self.weights = weights or DEFAULT_WEIGHTS

    # ─── Metrics ──────────────────────────────────────────────────────────────

    def import_metrics(self, records: Iterable[MetricRecord]) -> int:
        """Upsert one DailyMetrics row per record date. Returns rows written."""
        count = 0
        for record in records:
            existing = self.session.exec(
                select(DailyMetrics).where(DailyMetrics.record_date == record.date)
            ).first()
            values = {f: getattr(record, f) for f in _VALUE_FIELDS}

            if existing:
                for k, v in values.items():
                    setattr(existing, k, v)
                existing.updated_at = datetime.now(timezone.utc)
                self.session.add(existing)
            else:
                self.session.add(DailyMetrics(record_date=record.date, **values))
            count += 1

        self.session.commit()
        logger.info("Imported %d days of health metrics", count)
        return count

    def get_metrics(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[MetricRecord]:
        """Metrics in the inclusive [start, end] range, oldest first."""
        query = select(DailyMetrics)
        if start:
            query = query.where(DailyMetrics.record_date >= start)
        if end:
            query = query.where(DailyMetrics.record_date <= end)
        rows = self.session.exec(query.order_by(DailyMetrics.record_date)).all()
        return [record_from_row(r) for r in rows]

    def metrics_count(self) -> int:
        return self.session.exec(select(func.count()).select_from(DailyMetrics)).one()

    # ─── Vital Scores ─────────────────────────────────────────────────────────

    def recompute_scores(self) -> int:
        """Compute and upsert a Vital Score for every stored day."""
        history = self.get_metrics()
        for record in history:
            self._upsert_score(compute_score(record, self.weights))
        self.session.commit()
        logger.info("Calculated %d vital scores", len(history))
        return len(history)

    def _upsert_score(self, score: VitalScore) -> None:
        existing = self.session.exec(
            select(DailyVitalScore).where(DailyVitalScore.score_date == score.date)
        ).first()
        row = existing or DailyVitalScore(
            score_date=score.date,
            score=score.score,
            sleep_component=score.sleep_component,
            recovery_component=score.recovery_component,
            strain_component=score.strain_component,
        )
        row.score = score.score
        row.sleep_component = score.sleep_component
        row.recovery_component = score.recovery_component
        row.strain_component = score.strain_component
        row.recommendation = score.recommendation
        row.created_at = datetime.now(timezone.utc)
        self.session.add(row)

    def get_scores(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> List[VitalScore]:
        query = select(DailyVitalScore)
        if start:
            query = query.where(DailyVitalScore.score_date >= start)
        if end:
            query = query.where(DailyVitalScore.score_date <= end)
        rows = self.session.exec(query.order_by(DailyVitalScore.score_date)).all()
        return [score_from_row(r) for r in rows]

    def get_score(self, day: date) -> Optional[VitalScore]:
        row = self.session.exec(
            select(DailyVitalScore).where(DailyVitalScore.score_date == day)
        ).first()
        return score_from_row(row) if row else None

    def latest_score(self) -> Optional[VitalScore]:
        row = self.session.exec(
            select(DailyVitalScore).order_by(DailyVitalScore.score_date.desc())
        ).first()
        return score_from_row(row) if row else None

    def score_history(self, days: int = 30, today: Optional[date] = None) -> List[VitalScore]:
        today = today or _utc_today()
        return self.get_scores(start=today - timedelta(days=days), end=today)

    # ─── Trends ───────────────────────────────────────────────────────────────

    def refresh_trends(self, now: Optional[datetime] = None) -> List[Trend]:
        """
        Recompute every metric × timeframe trend from the full history and
        upsert each result. Returns the trends that were written.
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        history = self.get_metrics()
        trends = analyze_all(history, now=now)

        for trend in trends:
            self._upsert_trend(trend)
        self.session.commit()

        skipped = len(MetricKind) * len(Timeframe) - len(trends)
        logger.info(
            "Trend analysis complete: %d stored, %d skipped for insufficient data",
            len(trends),
            skipped,
        )
        return trends

    def _upsert_trend(self, trend: Trend) -> None:
        existing = self.session.exec(
            select(StoredTrend).where(
                StoredTrend.metric == trend.metric.value,
                StoredTrend.timeframe == trend.timeframe.value,
            )
        ).first()
        row = existing or StoredTrend(
            metric=trend.metric.value,
            timeframe=trend.timeframe.value,
            baseline=trend.baseline,
            current_average=trend.current_average,
            percent_change=trend.percent_change,
            direction=trend.direction.value,
        )
        row.baseline = trend.baseline
        row.current_average = trend.current_average
        row.percent_change = trend.percent_change
        row.direction = trend.direction.value
        row.detected_at = trend.detected_at
        self.session.add(row)
        logger.debug(
            "%s/%s: %+.1f%% (%s)",
            trend.metric.value,
            trend.timeframe.value,
            trend.percent_change,
            trend.direction.value,
        )

    def get_trends(self, timeframe: Optional[Union[Timeframe, str]] = None) -> List[Trend]:
        query = select(StoredTrend)
        if timeframe is not None:
            query = query.where(StoredTrend.timeframe == Timeframe(timeframe).value)
        rows = self.session.exec(query.order_by(StoredTrend.id)).all()
        return [trend_from_row(r) for r in rows]

    # ─── Views ────────────────────────────────────────────────────────────────

    def dashboard(self, today: Optional[date] = None, recent_days: int = 7) -> Dashboard:
        today = today or _utc_today()
        return Dashboard(
            today_score=self.latest_score(),
            recent_metrics=self.get_metrics(start=today - timedelta(days=recent_days), end=today),
            active_insights=significant_shifts(self.get_trends()),
        )

    def trend_view(self, timeframe: Union[Timeframe, str], today: Optional[date] = None) -> TrendView:
        timeframe = Timeframe(timeframe)
        today = today or _utc_today()
        trends = self.get_trends(timeframe)
        return TrendView(
            timeframe=timeframe,
            metrics=self.get_metrics(start=today - timedelta(days=timeframe.days), end=today),
            trends=trends,
            insights=significant_shifts(trends),
        )

    # ─── Demo data ────────────────────────────────────────────────────────────

    def seed(
        self,
        scenario: str,
        seed: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Populate an empty DB from a mock scenario. No-op if data exists."""
        count = self.metrics_count()
        if count > 0:
            logger.info("Database already has %d days of data", count)
            return 0
        return self._load_scenario(scenario, seed, now)

    def reset_with_scenario(
        self,
        scenario: str,
        seed: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Clear every table, then regenerate metrics, scores and trends."""
        for model in (StoredTrend, DailyVitalScore, DailyMetrics):
            self.session.exec(delete(model))
        self.session.commit()
        logger.info("Cleared all stored data")
        return self._load_scenario(scenario, seed, now)

    def _load_scenario(self, scenario: str, seed: Optional[int], now: Optional[datetime]) -> int:
        now = now or datetime.now(timezone.utc)
        logger.info("Generating mock data for scenario: %s", scenario)
        records = generate_scenario(scenario, end=now.date(), seed=seed)
        count = self.import_metrics(records)
        self.recompute_scores()
        self.refresh_trends(now=now)
        return count
