"""Trend and insight routes."""
from typing import Optional

from fastapi import APIRouter, Depends

from summit.analysis.metrics import Timeframe
from summit.api.deps import get_service
from summit.services.health_data import HealthDataService

router = APIRouter()


@router.get("/")
def list_trends(
    timeframe: Optional[Timeframe] = None,
    service: HealthDataService = Depends(get_service),
):
    """Stored trends, optionally for a single timeframe."""
    return service.get_trends(timeframe)


@router.post("/refresh")
def refresh_trends(service: HealthDataService = Depends(get_service)):
    """Recompute every metric × timeframe trend from the full history."""
    trends = service.refresh_trends()
    return {"trends_stored": len(trends)}


@router.get("/{timeframe}")
def trend_view(timeframe: Timeframe, service: HealthDataService = Depends(get_service)):
    """Metrics, stored trends and significant shifts for one timeframe."""
    return service.trend_view(timeframe)


@router.get("/{timeframe}/insights")
def timeframe_insights(timeframe: Timeframe, service: HealthDataService = Depends(get_service)):
    """Significant declining shifts for one timeframe, most severe first."""
    return service.trend_view(timeframe).insights
