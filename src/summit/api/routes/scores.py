"""Vital Score routes."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from summit.api.deps import get_service
from summit.services.health_data import HealthDataService

router = APIRouter()


@router.get("/")
def score_history(days: int = 30, service: HealthDataService = Depends(get_service)):
    """Vital Scores for the last `days` days, oldest first."""
    return service.score_history(days=days)


@router.post("/recompute")
def recompute_scores(service: HealthDataService = Depends(get_service)):
    """Recompute every stored day's score from its metrics."""
    return {"scores_computed": service.recompute_scores()}


@router.get("/{score_date}")
def get_score(score_date: date, service: HealthDataService = Depends(get_service)):
    """Vital Score for one day."""
    score = service.get_score(score_date)
    if not score:
        raise HTTPException(status_code=404, detail="No Vital Score for that date")
    return score
