'''
API status and database connectivity checks.
'''
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from huma.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SERVICE_NAME = "huma-insights-api"

@router.get("/health")
async def health():
    """
    Simple health check endpoint for deployment checks.
    Does not require database connectivity.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "API is running",
        "service": SERVICE_NAME
    }

@router.get("/health/full")
async def health_full(db: AsyncSession = Depends(get_db)):
    """
    Verifies both API and database connectivity.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "unknown",
        "service": SERVICE_NAME
    }

    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        health_status["database"] = "connected"
        logger.info("Database health check successful")
    except Exception as e:
        logger.error("Database health check failed: %s", str(e))
        health_status["status"] = "unhealthy"
        health_status["database"] = "disconnected"
        health_status["error"] = str(e)

    return health_status
