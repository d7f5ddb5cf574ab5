"""
Security headers middleware.

Adds HTTP hardening headers to every response.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

DEFAULT_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware adding security headers to HTTP responses."""

    def __init__(self, app: ASGIApp, headers: dict[str, str] | None = None) -> None:
        """
        Initialize the security headers middleware.

        Args:
            app: The FastAPI application
            headers: Headers to use instead of DEFAULT_SECURITY_HEADERS
        """
        super().__init__(app)
        self.headers = headers if headers is not None else DEFAULT_SECURITY_HEADERS

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response: Response = await call_next(request)

        for header_name, header_value in self.headers.items():
            # Headers already set by a handler win
            response.headers.setdefault(header_name, header_value)

        return response
