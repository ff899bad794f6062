"""Founder Discovery API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DiscoveryError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: the FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from founder_discovery.api.error_handlers import register_error_handlers
from founder_discovery.api.routes import (
    assumptions, beachhead, evaluation, health, interviews, projects,
)
from founder_discovery.config import get_settings
from founder_discovery.infrastructure.database import init_db
from founder_discovery.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Founder Discovery API started")
    yield
    await manager.engine.dispose()
    logger.info("Founder Discovery API shutting down")


app = FastAPI(
    title="Founder Discovery API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(projects.router)
app.include_router(assumptions.router)
app.include_router(interviews.router)
app.include_router(evaluation.router)
app.include_router(beachhead.router)

register_error_handlers(app)
