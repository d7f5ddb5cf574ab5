# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Service banner and health check
# - users.py: User list/create/delete endpoints
# - stats.py: User statistics endpoint
# - metrics.py: Prometheus exposition endpoint
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import stats
from . import metrics

__all__ = [
    "health",
    "users",
    "stats",
    "metrics",
]
