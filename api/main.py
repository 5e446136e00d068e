"""FastAPI application for the Golf Tour Scoring API."""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from database.connection import db
from database.db_manager import DatabaseManager
from scoring.settings import scoring_settings


def configure_logging() -> None:
    """Replace loguru's default sink with the configured ones."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=scoring_settings.log_level,
    )
    if scoring_settings.log_file:
        logger.add(
            scoring_settings.log_file,
            rotation="1 day",
            retention="30 days",
            level="DEBUG",
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the scoring database pool on startup, close it on shutdown."""
    await db.initialize()
    app.state.db_manager = DatabaseManager(db.pool)
    yield
    await db.close()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Golf Tour Scoring API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import competitions, tours
    app.include_router(competitions.router, prefix="/api/competitions", tags=["competitions"])
    app.include_router(tours.router, prefix="/api/tours", tags=["tours"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
