# =============================================================================
# app/middleware/ - Cross-Cutting Request Handling
# =============================================================================
# Middleware applied to every request, outermost first:
# - CORS (FastAPI's CORSMiddleware, configured in main.py)
# - security_headers.py: hardening headers on every response
# - rate_limit.py: per-client fixed-window request limit
# - metrics.py: request timing and counters, labeled by route template
# =============================================================================

from .metrics import MetricsMiddleware, resolve_route_template
from .rate_limit import FixedWindowRateLimiter, RateLimitMiddleware
from .security_headers import DEFAULT_SECURITY_HEADERS, SecurityHeadersMiddleware

__all__ = [
    "MetricsMiddleware",
    "resolve_route_template",
    "FixedWindowRateLimiter",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
    "DEFAULT_SECURITY_HEADERS",
]
