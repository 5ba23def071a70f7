"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from stockbook import __version__
from stockbook.application.dto.responses import HealthResponse
from stockbook.config import get_logger
from stockbook.core.exceptions import DatabaseError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check with uptime."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """Run a trivial query through the connection pool."""
    from stockbook.infrastructure.storage.sqlite import reading

    try:
        async with reading("health_check") as conn:
            await conn.execute("SELECT 1")
        database = "ok"
    except DatabaseError as e:
        logger.warning("db_health_failed", error=e.message)
        database = f"error: {e.details['error']}"

    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )
