"""Health & Readiness Checks — liveness plus database and card-schema readiness.

Invariants:
    - GET /health/ answers 200 whenever the process is up
    - GET /health/ready answers 503 until the database is reachable and the
      card tables exist (migrations applied)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import select

from cardsmith.core.errors import CardsmithError
from cardsmith.infrastructure import database
from cardsmith.models.business_card import BusinessCard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": "cardsmith-api", "version": "1.0.0"}


async def _card_schema_ready(manager: database.DatabaseSessionManager) -> bool:
    try:
        async with manager.session("health_check") as db:
            await db.execute(select(BusinessCard.id).limit(1))
        return True
    except CardsmithError as e:
        logger.warning(f"Card schema not ready: {e.message}")
        return False


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    checks = {"database": "unavailable", "card_schema": "unknown"}
    if manager and await manager.health_check():
        checks["database"] = "healthy"
        checks["card_schema"] = (
            "healthy" if await _card_schema_ready(manager) else "missing"
        )
    if any(value != "healthy" for value in checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
