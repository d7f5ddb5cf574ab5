"""
Request metrics middleware.

Times every request and records the outcome in the application's
RequestMetrics: one histogram observation and one counter increment per
request, labeled by method, route template and status code.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match
from starlette.types import ASGIApp

from core.metrics import UNMATCHED_ROUTE, RequestMetrics

logger = logging.getLogger(__name__)


def _join(prefix: str, path: str) -> str:
    # Routers that copy their prefix into route paths are already absolute
    if not prefix or path == prefix or path.startswith(prefix + "/"):
        return path
    return prefix + path


def _template_for(routes, target, prefix: str = "") -> str | None:
    for candidate in routes:
        if candidate is target:
            return _join(prefix, getattr(candidate, "path", "") or "")
        children = getattr(candidate, "routes", None)
        if children:
            # Included routers expose .prefix, mounts expose .path
            node_prefix = getattr(candidate, "prefix", None)
            if node_prefix is None:
                node_prefix = getattr(candidate, "path", "")
            found = _template_for(children, target, _join(prefix, node_prefix or ""))
            if found is not None:
                return found
    return None


def resolve_route_template(request: Request) -> str:
    """
    Return the full path template of the route that handled this request.

    `/api/users/3f2a...` resolves to `/api/users/{user_id}`, which keeps the
    route label's cardinality bounded by the number of routes. Requests that
    matched nothing share the single UNMATCHED_ROUTE label.

    The matched route's own `path` can be relative to the router it was
    included from, so the template is rebuilt by locating the route in the
    application's route tree and joining every prefix on the way down.
    """
    route = request.scope.get("route")
    if route is not None:
        template = _template_for(request.app.router.routes, route)
        if template is None:
            template = getattr(route, "path", None)
        if template is not None:
            return template or "/"

    # Routing may not have stored the route in the scope (e.g. a mounted
    # sub-application); fall back to matching against the router.
    router = request.scope.get("router")
    if router is not None:
        for candidate in router.routes:
            match, _ = candidate.matches(request.scope)
            if match != Match.NONE and getattr(candidate, "path", None):
                return candidate.path

    return UNMATCHED_ROUTE


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Middleware recording request duration and count.

    Handlers that raise are recorded with status 500 before the exception
    continues to the server error handler.
    """

    def __init__(self, app: ASGIApp, metrics: RequestMetrics) -> None:
        """
        Initialize the metrics middleware.

        Args:
            app: The FastAPI application
            metrics: Registry shared with the /metrics endpoint
        """
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, start)
            raise

        self._record(request, response.status_code, start)
        return response

    def _record(self, request: Request, status_code: int, start: float) -> None:
        duration = time.perf_counter() - start
        route = resolve_route_template(request)
        self.metrics.observe_request(request.method, route, status_code, duration)
        logger.debug(
            f"{request.method} {route} -> {status_code} in {duration * 1000:.1f}ms"
        )
