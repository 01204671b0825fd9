"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running
and Postgres is reachable. Always 200 — "degraded" tells the
load balancer's humans, not the load balancer, that storage is down.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from subtracker import __version__
from subtracker.db.engine import get_db

router = APIRouter()
logger = structlog.get_logger()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await db.execute(text("SELECT 1"))
        checks["postgres"] = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health.postgres_unavailable", error=str(e))
        checks["postgres"] = "unavailable"

    status = "healthy" if checks["postgres"] == "ok" else "degraded"
    return {"status": status, **checks}
