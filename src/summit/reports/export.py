"""
Data export: JSON, CSV and Markdown renderings of metrics, scores and trends.

Your data, your files. JSON is full fidelity and machine readable, CSV is for
spreadsheets, Markdown is a human-readable (Obsidian-friendly) report.
"""
import csv
import io
import json
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from summit.analysis.insights import explain
from summit.analysis.metrics import MetricRecord, Timeframe
from summit.analysis.numeric import round_half_up
from summit.analysis.trends import Trend, TrendDirection
from summit.analysis.vital_score import VitalScore


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    MARKDOWN = "markdown"


@dataclass
class ExportOptions:
    format: ExportFormat = ExportFormat.JSON
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    include_metrics: bool = True
    include_scores: bool = True
    include_trends: bool = True


@dataclass
class ExportBundle:
    metrics: List[MetricRecord] = field(default_factory=list)
    scores: List[VitalScore] = field(default_factory=list)
    trends: List[Trend] = field(default_factory=list)
    exported_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "0.1.0"


def export_data(bundle: ExportBundle, options: ExportOptions) -> str:
    """
    Render bundle in options.format.

    Raises:
        ValueError: unknown format.
    """
    fmt = ExportFormat(options.format)
    filtered = filter_by_date_range(bundle, options)

    if fmt == ExportFormat.JSON:
        return export_json(filtered, options)
    if fmt == ExportFormat.CSV:
        return export_csv(filtered, options)
    return export_markdown(filtered, options)


def filter_by_date_range(bundle: ExportBundle, options: ExportOptions) -> ExportBundle:
    """Inclusive date filter on metrics and scores. Trends are never date filtered."""
    start, end = options.start_date, options.end_date
    if start is None and end is None:
        return bundle

    def in_range(day: date) -> bool:
        if start and day < start:
            return False
        if end and day > end:
            return False
        return True

    return replace(
        bundle,
        metrics=[m for m in bundle.metrics if in_range(m.date)],
        scores=[s for s in bundle.scores if in_range(s.date)],
    )


# ─── JSON ──────────────────────────────────────────────────────────────────────

def _json_default(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def export_json(bundle: ExportBundle, options: ExportOptions) -> str:
    output: Dict[str, Any] = {
        "exported_at": bundle.exported_at,
        "version": bundle.version,
    }
    if options.include_metrics:
        output["metrics"] = [asdict(m) for m in bundle.metrics]
    if options.include_scores:
        output["scores"] = [asdict(s) for s in bundle.scores]
    if options.include_trends:
        # str-Enum members serialize as their values
        output["trends"] = [asdict(t) for t in bundle.trends]
    return json.dumps(output, indent=2, default=_json_default)


# ─── CSV ───────────────────────────────────────────────────────────────────────

METRICS_HEADER = [
    "date", "body_battery", "sleep_score", "sleep_duration_hrs", "deep_sleep_hrs",
    "rem_sleep_hrs", "stress_avg", "resting_hr", "hrv_avg", "intensity_minutes", "steps",
]
SCORES_HEADER = [
    "date", "score", "sleep_component", "recovery_component", "strain_component",
    "recommendation",
]


def _hours(seconds: Optional[int]) -> str:
    return "" if seconds is None else f"{seconds / 3600:.2f}"


def _blank(value: Any) -> Any:
    return "" if value is None else value


def export_csv(bundle: ExportBundle, options: ExportOptions) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    if options.include_metrics and bundle.metrics:
        buf.write("# Health Metrics\n")
        writer.writerow(METRICS_HEADER)
        for m in bundle.metrics:
            writer.writerow([
                m.date.isoformat(),
                _blank(m.body_battery),
                _blank(m.sleep_score),
                _hours(m.sleep_duration_seconds),
                _hours(m.deep_sleep_seconds),
                _hours(m.rem_sleep_seconds),
                _blank(m.stress_avg),
                _blank(m.resting_hr),
                _blank(m.hrv_avg),
                _blank(m.intensity_minutes),
                _blank(m.steps),
            ])
        buf.write("\n")

    if options.include_scores and bundle.scores:
        buf.write("# Vital Scores\n")
        score_writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_NONNUMERIC)
        writer.writerow(SCORES_HEADER)
        for s in bundle.scores:
            score_writer.writerow([
                s.date.isoformat(),
                s.score,
                s.sleep_component,
                s.recovery_component,
                s.strain_component,
                s.recommendation,
            ])
        buf.write("\n")

    return buf.getvalue()


# ─── Markdown ──────────────────────────────────────────────────────────────────

def _dash(value: Any) -> Any:
    return "-" if value is None else value


def export_markdown(bundle: ExportBundle, options: ExportOptions) -> str:
    lines = [
        "# Summit Health Report",
        f"> Exported on {bundle.exported_at.strftime('%A, %B %d, %Y')}",
        "",
    ]

    if options.include_scores and bundle.scores:
        latest = bundle.scores[-1]
        lines += [
            f"## Today's Vital Score: {latest.score}/100",
            "",
            f"**Recommendation:** {latest.recommendation}",
            "",
            "| Component | Score |",
            "|-----------|-------|",
            f"| Sleep | {latest.sleep_component} |",
            f"| Recovery | {latest.recovery_component} |",
            f"| Strain | {latest.strain_component} |",
            "",
        ]

    if options.include_trends:
        insights = [explain(t) for t in bundle.trends if t.direction != TrendDirection.STABLE]
        if insights:
            lines += ["## Active Trends", ""]
            for insight in insights:
                arrow = "^" if insight.direction == TrendDirection.IMPROVING else "v"
                lines += [
                    f"### {arrow} {insight.summary}",
                    "",
                    f"**Why it matters:** {insight.rationale}",
                    "",
                ]
                if insight.actions:
                    lines.append("**Strategies:**")
                    lines += [f"- {action}" for action in insight.actions]
                    lines.append("")

    if options.include_metrics and bundle.metrics:
        lines += [
            "## Recent Metrics",
            "",
            "| Date | Body Battery | Sleep | Stress | Steps |",
            "|------|--------------|-------|--------|-------|",
        ]
        for m in bundle.metrics[-7:]:
            lines.append(
                f"| {m.date.isoformat()} | {_dash(m.body_battery)} | {_dash(m.sleep_score)} "
                f"| {_dash(m.stress_avg)} | {_dash(m.steps)} |"
            )
        lines.append("")

    lines += ["---", f"*Generated by Summit v{bundle.version}*"]
    return "\n".join(lines)


def generate_weekly_report(
    metrics: List[MetricRecord],
    scores: List[VitalScore],
    trends: List[Trend],
    today: Optional[date] = None,
) -> str:
    """
    Weekly Markdown summary: average score, notable 1W trends, daily breakdown.

    Covers the 7 days ending today (inclusive of the day a week ago).
    """
    today = today or datetime.now(timezone.utc).date()
    week_ago = today - timedelta(days=7)
    week_scores = [s for s in scores if week_ago <= s.date <= today]

    lines = [
        "# Weekly Health Summary",
        f"## {week_ago.strftime('%b %d')} - {today.strftime('%b %d, %Y')}",
        "",
    ]

    if week_scores:
        avg = sum(s.score for s in week_scores) / len(week_scores)
        lines += [f"**Average Vital Score:** {round_half_up(avg)}/100", ""]

    week_days = sum(1 for m in metrics if week_ago <= m.date <= today)
    if week_days:
        lines += [f"_{week_days} days of metrics recorded this week._", ""]

    observations = [
        explain(t) for t in trends
        if t.timeframe == Timeframe.ONE_WEEK and t.direction != TrendDirection.STABLE
    ]
    if observations:
        lines += ["### Key Observations", ""]
        lines += [f"- {insight.summary}" for insight in observations]
        lines.append("")

    lines += [
        "### Daily Breakdown",
        "",
        "| Date | Vital Score | Recommendation |",
        "|------|-------------|----------------|",
    ]
    for s in week_scores:
        short = s.recommendation.split(".")[0] if s.recommendation else "-"
        lines.append(f"| {s.date.isoformat()} | {s.score} | {short} |")

    return "\n".join(lines)
