"""Cardsmith API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CardsmithError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardsmith.api.error_handlers import register_error_handlers
from cardsmith.api.routes import cards, health, public, registry
from cardsmith.config import get_settings
from cardsmith.infrastructure import database
from cardsmith.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"Cardsmith API started (require_slug={settings.require_slug})",
    )
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Cardsmith API shutting down")


app = FastAPI(
    title="Cardsmith API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "X-Owner-Id"],
    expose_headers=["Content-Disposition"],
)

app.include_router(health.router)
app.include_router(registry.router)
app.include_router(cards.router)
app.include_router(public.router)

register_error_handlers(app)
