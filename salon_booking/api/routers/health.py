"""
Health check endpoints for monitoring and orchestration.

- /health: Basic liveness check (always returns 200)
- /health/live: Alias used by orchestrators that expect the /live suffix
- /health/ready: Readiness check; pings the database unless running in-memory
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from salon_booking.api.dependencies import get_session

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "salon-booking-api"


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
async def health_check_ready(session: AsyncSession | None = Depends(get_session)):
    """
    Readiness probe.

    Returns 503 when the database does not answer. The in-memory store is
    always ready.
    """
    if session is None:
        return {"status": "ready", "checks": {"database": "in_memory"}}

    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
    except Exception as e:
        logger.error("Readiness check: Database unhealthy", exc_info=e)
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": "unhealthy"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
