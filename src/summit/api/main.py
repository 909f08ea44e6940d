"""FastAPI application factory."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import SQLModel

from summit.api.routes import dashboard, export, scores, trends
from summit.config import get_settings
from summit.db.engine import get_engine


def create_app() -> FastAPI:
    """Build and return the FastAPI app."""

    engine = get_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create tables on startup (idempotent)
        SQLModel.metadata.create_all(engine)
        yield

    app = FastAPI(
        title="Summit API",
        description="Daily Vital Score and multi-timeframe health trends",
        version=get_settings().app_version,
        lifespan=lifespan,
    )

    app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
    app.include_router(scores.router, prefix="/scores", tags=["scores"])
    app.include_router(trends.router, prefix="/trends", tags=["trends"])
    app.include_router(export.router, prefix="/export", tags=["export"])

    return app


# Module-level app instance for uvicorn
app = create_app()
