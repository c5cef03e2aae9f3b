"""Health check endpoints."""

from datetime import datetime
from enum import Enum

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from config import get_settings
from core.database import get_session
from core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)
router = APIRouter()


class HealthStatus(str, Enum):
    """Health status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@router.get("/health")
async def health():
    """Basic liveness check."""
    return {"status": "ok", "timestamp": datetime.utcnow().isoformat()}


@router.get("/health/ready")
async def readiness_check(session: AsyncSession = Depends(get_session)):
    """Readiness check: the database must answer."""
    checks = {}
    overall_status = HealthStatus.HEALTHY

    try:
        await session.execute(text("SELECT 1"))
        checks["database"] = {"status": "ok"}
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        checks["database"] = {"status": "error", "error": str(e)}
        overall_status = HealthStatus.UNHEALTHY

    return {
        "status": overall_status.value,
        "version": settings.app_version,
        "checks": checks,
        "timestamp": datetime.utcnow().isoformat(),
    }
