"""Export route: JSON, CSV or Markdown download of stored data."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from summit.api.deps import get_service
from summit.config import get_settings
from summit.reports.export import ExportBundle, ExportFormat, ExportOptions, export_data
from summit.services.health_data import HealthDataService

router = APIRouter()

_MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
    ExportFormat.MARKDOWN: "text/markdown",
}


@router.get("/", response_class=PlainTextResponse)
def export(
    format: ExportFormat = ExportFormat.JSON,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    include_metrics: bool = True,
    include_scores: bool = True,
    include_trends: bool = True,
    service: HealthDataService = Depends(get_service),
):
    """Render stored metrics, scores and trends in the requested format."""
    bundle = ExportBundle(
        metrics=service.get_metrics(),
        scores=service.get_scores(),
        trends=service.get_trends(),
        version=get_settings().app_version,
    )
    options = ExportOptions(
        format=format,
        start_date=start_date,
        end_date=end_date,
        include_metrics=include_metrics,
        include_scores=include_scores,
        include_trends=include_trends,
    )
    return PlainTextResponse(export_data(bundle, options), media_type=_MEDIA_TYPES[format])
