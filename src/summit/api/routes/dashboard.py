"""Today's dashboard route."""
from fastapi import APIRouter, Depends

from summit.api.deps import get_service
from summit.config import get_settings
from summit.services.health_data import HealthDataService

router = APIRouter()


@router.get("/")
def get_dashboard(service: HealthDataService = Depends(get_service)):
    """Latest Vital Score, recent metrics and significant declining trends."""
    return service.dashboard(recent_days=get_settings().recent_metrics_days)
