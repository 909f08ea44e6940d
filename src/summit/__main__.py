"""
Command-line entrypoint.

The HTTP API runs separately under uvicorn.

Usage:
    python -m summit seed --scenario burnout   # fill an empty DB with mock data
    python -m summit reset --scenario recovery # wipe and regenerate
    python -m summit refresh                   # recompute scores + trends
    python -m summit brief                     # today's score and urgent shifts
    python -m summit weekly                    # weekly Markdown summary
    python -m summit export --format csv --output summit.csv
    uvicorn summit.api.main:app --host 0.0.0.0 --port 8000
"""
import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    from summit.demo.mock_data import SCENARIOS
    from summit.reports.export import ExportFormat

    parser = argparse.ArgumentParser(prog="summit", description="Summit wellness analytics")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("seed", "Populate an empty database from a mock scenario"),
        ("reset", "Clear all data and regenerate from a mock scenario"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--scenario", choices=sorted(SCENARIOS), default=None)
        p.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")

    sub.add_parser("refresh", help="Recompute Vital Scores and trends from stored metrics")
    sub.add_parser("brief", help="Print today's Vital Score and significant shifts")
    sub.add_parser("weekly", help="Print the weekly Markdown summary")

    p = sub.add_parser("export", help="Export stored data")
    p.add_argument("--format", choices=[f.value for f in ExportFormat], default="json")
    p.add_argument("--start", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    p.add_argument("--end", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    p.add_argument("--output", type=Path, default=None, help="Write to file instead of stdout")

    return parser


def _format_brief(dashboard) -> str:
    lines = []
    score = dashboard.today_score
    if score is None:
        lines.append("No Vital Score yet. Run `python -m summit seed` or `refresh` first.")
    else:
        lines.append(f"Vital Score {score.date.isoformat()}: {score.score}/100")
        lines.append(
            f"  sleep {score.sleep_component} | recovery {score.recovery_component} "
            f"| strain {score.strain_component}"
        )
        lines.append(f"  {score.recommendation}")

    if dashboard.active_insights:
        lines.append("")
        lines.append("Significant shifts:")
        for insight in dashboard.active_insights:
            lines.append(f"- {insight.summary}")
            lines.append(f"  {insight.rationale}")
    return "\n".join(lines)


def run(argv: Optional[List[str]] = None) -> int:
    from sqlmodel import Session

    from summit.config import get_settings
    from summit.db.engine import get_engine
    from summit.reports.export import (
        ExportBundle,
        ExportFormat,
        ExportOptions,
        export_data,
        generate_weekly_report,
    )
    from summit.services.health_data import HealthDataService

    args = _build_parser().parse_args(argv)
    settings = get_settings()

    with Session(get_engine()) as session:
        service = HealthDataService(session, weights=settings.score_weights())

        if args.command in ("seed", "reset"):
            scenario = args.scenario or settings.default_scenario
            seed = args.seed if args.seed is not None else settings.mock_seed
            try:
                if args.command == "seed":
                    count = service.seed(scenario, seed=seed)
                else:
                    count = service.reset_with_scenario(scenario, seed=seed)
            except KeyError as exc:
                logger.error("%s", exc.args[0])
                return 2
            logger.info("Loaded %d days for scenario %s", count, scenario)

        elif args.command == "refresh":
            service.recompute_scores()
            service.refresh_trends()

        elif args.command == "brief":
            print(_format_brief(service.dashboard(recent_days=settings.recent_metrics_days)))

        elif args.command == "weekly":
            print(generate_weekly_report(
                service.get_metrics(), service.get_scores(), service.get_trends()
            ))

        elif args.command == "export":
            bundle = ExportBundle(
                metrics=service.get_metrics(),
                scores=service.get_scores(),
                trends=service.get_trends(),
                version=settings.app_version,
            )
            options = ExportOptions(
                format=ExportFormat(args.format),
                start_date=args.start,
                end_date=args.end,
            )
            text = export_data(bundle, options)
            if args.output:
                args.output.write_text(text, encoding="utf-8")
                logger.info("Wrote %s export to %s", args.format, args.output)
            else:
                print(text)

    return 0


if __name__ == "__main__":
    sys.exit(run())
