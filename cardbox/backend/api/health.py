"""
Health Endpoints.

/health answers as long as the process is up. /health/ready also runs
SELECT 1 against the card database, bounded by
database.ready_timeout_seconds, and answers 503 when that fails.
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from cardbox.backend.core import database
from cardbox.backend.core.config import get_app_config
from cardbox.backend.core.logging import get_logger
from cardbox.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """Run SELECT 1; report latency, or the error as text."""
    started = time.perf_counter()
    try:
        async with database.get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}
    return {
        "status": "healthy",
        "latency_ms": int((time.perf_counter() - started) * 1000),
    }


@router.get("/health")
async def health_check() -> dict[str, bool]:
    return {"ok": True}


@router.get("/health/ready")
async def readiness_check() -> JSONResponse:
    timeout = get_app_config().database.ready_timeout_seconds
    try:
        async with asyncio.timeout(timeout):
            db_result = await check_database()
    except TimeoutError:
        db_result = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    healthy = db_result["status"] == "healthy"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": {"database": db_result},
        "timestamp": utc_now().isoformat(),
    }
    if not healthy:
        logger.warning("Readiness check failed", extra={"checks": body["checks"]})
    return JSONResponse(status_code=200 if healthy else 503, content=body)
