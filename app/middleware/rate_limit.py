"""
Rate limiting middleware.

Fixed-window request limit per client address, kept in process memory.
Health checks and metrics scrapes are never limited.
"""

import logging
import math
import threading
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.exceptions import RateLimitExceededError, error_response

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATHS = ("/health", "/metrics")


class FixedWindowRateLimiter:
    """
    Counts requests per key in fixed windows.

    Example:
        limiter = FixedWindowRateLimiter(limit=100, window_seconds=900)
        allowed, retry_after = limiter.hit("10.0.0.1")
    """

    def __init__(
        self,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> tuple[bool, int]:
        """
        Record one request for key.

        Returns:
            (allowed, retry_after) - retry_after is the whole number of
            seconds until the key's window resets
        """
        now = self._clock()
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            # Expired windows are pruned once the table grows past 1024 keys
            if len(self._windows) > 1024:
                self._prune(now)

        retry_after = max(1, math.ceil(started + self.window_seconds - now))
        return count <= self.limit, retry_after

    def _prune(self, now: float) -> None:
        expired = [
            key for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware rejecting clients that exceed their request allowance.

    Clients are keyed on the connecting peer address. X-Forwarded-For is
    only read when trust_forwarded is set, i.e. when every request arrives
    through a proxy that overwrites the header.
    """

    def __init__(
        self,
        app: ASGIApp,
        limiter: FixedWindowRateLimiter,
        exclude_paths: tuple[str, ...] = DEFAULT_EXCLUDE_PATHS,
        trust_forwarded: bool = False,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.exclude_paths = exclude_paths
        self.trust_forwarded = trust_forwarded

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        client_id = self._client_id(request)
        allowed, retry_after = self.limiter.hit(client_id)
        if not allowed:
            logger.warning(f"Rate limit exceeded: {client_id} at {request.url.path}")
            return error_response(RateLimitExceededError(self.limiter.limit, retry_after))

        return await call_next(request)

    def _client_id(self, request: Request) -> str:
        if self.trust_forwarded:
            # First X-Forwarded-For address is the client, the rest are proxies
            forwarded_for = request.headers.get("X-Forwarded-For")
            if forwarded_for:
                return forwarded_for.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"
