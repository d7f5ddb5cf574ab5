# =============================================================================
# app/routers/stats.py - Statistics Endpoint
# =============================================================================
# Read-only summary of the user set plus process information.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import UserServiceDep
from core.models.stats import StatsResponse

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
def get_stats(service: UserServiceDep):
    """
    Get user statistics.

    Returns the total user count, the count per role and server info
    (uptime, memory, Python version).
    """
    return service.get_stats()
