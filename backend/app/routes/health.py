"""
Rephrase Backend: Health Route
================================

GET /health for load balancer and uptime probes. It is unauthenticated and
always answers 200; the body says whether the database is reachable.
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from app import __version__
from app.database import engine
from app.schemas.rephrase import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started = time.monotonic()


async def database_reachable() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", e)
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Database connectivity, version and uptime. No identity header needed.",
)
async def health_check() -> HealthResponse:
    db_ok = await database_reachable()
    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        uptime_seconds=round(time.monotonic() - _started, 2),
    )
