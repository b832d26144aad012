"""
MemoPad Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Checks the database and the Gemini API and returns an aggregate status.

Status levels:
    - healthy:   Database reachable, Gemini reachable
    - degraded:  Database reachable, Gemini unavailable or not configured
                 (memo CRUD still works, summaries do not)
    - unhealthy: Database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text

from app import __version__
from app.database import engine
from app.schemas.memo import HealthResponse
from app.services.gemini_service import get_summarizer
from app.services.llm_base import SummaryProvider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    summarizer: SummaryProvider = Depends(get_summarizer),
) -> HealthResponse:
    """
    Probe the database (SELECT 1) and the summary provider.

    Always returns 200; the `status` field carries the verdict.
    """
    db_status = "connected"
    gemini_status = "available"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Gemini API ──────────────────────────────────────────────────
    if not getattr(summarizer, "is_configured", True):
        gemini_status = "not_configured"
    elif not await summarizer.health_check():
        gemini_status = "unavailable"

    if gemini_status != "available" and overall != "unhealthy":
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        gemini=gemini_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
