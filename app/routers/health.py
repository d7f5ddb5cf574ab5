# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides the service banner and a health check for monitoring and
# container orchestrators. Neither touches the store.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter

from app.config import settings
from core.models.stats import HealthResponse, RootResponse
from core.runtime import memory_usage, uptime_seconds

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/", response_model=RootResponse, tags=["Root"])
async def root():
    """
    Root endpoint - returns the service banner.
    """
    return RootResponse(
        message=settings.APP_NAME,
        version=settings.APP_VERSION,
        status="running",
        timestamp=_now(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status, uptime and memory for load balancers
    and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        uptime=uptime_seconds(),
        memory=memory_usage(),
    )
