"""Health check endpoints.

GET / is a bare liveness probe. GET /api/health also verifies the
database is reachable.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from lottohist import __version__
from lottohist.db.engine import get_db

logger = structlog.get_logger()

router = APIRouter()

# Mounted at the app root, outside the /api prefix.
root_router = APIRouter()


@root_router.get("/")
async def liveness():
    return {"status": "ok"}


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("health.database_unreachable", error=str(e))
        checks["database"] = "error"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
