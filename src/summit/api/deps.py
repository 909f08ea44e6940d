"""Shared FastAPI dependencies."""
from fastapi import Depends
from sqlmodel import Session

from summit.config import get_settings
from summit.db.engine import get_session
from summit.services.health_data import HealthDataService


def get_service(session: Session = Depends(get_session)) -> HealthDataService:
    return HealthDataService(session, weights=get_settings().score_weights())
