# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the User Directory API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --port 5000
#   python -m app
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings
from app.exceptions import (
    UserDirectoryException,
    http_exception_handler,
    unhandled_exception_handler,
    user_directory_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    DEFAULT_SECURITY_HEADERS,
    FixedWindowRateLimiter,
    MetricsMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)
from app.routers import health, metrics, stats, users
from core.metrics import RequestMetrics
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log effective configuration
    - Shutdown: drop the shared store client
    """
    app_settings: Settings = app.state.settings

    logger.info(f"Starting {app_settings.APP_NAME} in {app_settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {app_settings.cors_origins_list}")
    logger.info(f"Metrics available at http://localhost:{app_settings.API_PORT}/metrics")
    logger.info(f"Health check at http://localhost:{app_settings.API_PORT}/health")

    yield

    logger.info("Shutting down, closing store connection")
    SupabaseClient.reset()


def create_app(
    app_settings: Settings | None = None,
    request_metrics: RequestMetrics | None = None,
) -> FastAPI:
    """
    Build a configured FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment settings)
        request_metrics: Metrics registry (a new one is created by default)

    Returns:
        FastAPI application with middleware, handlers and routers installed
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="REST API for a directory of users, with Prometheus metrics.",
        version=app_settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Users", "description": "Create, list and delete users"},
            {"name": "Stats", "description": "User counts and server info"},
            {"name": "Health", "description": "Service banner and health check"},
            {"name": "Metrics", "description": "Prometheus exposition"},
        ],
    )

    # One registry per application, shared by the middleware and /metrics
    app.state.settings = app_settings
    app.state.metrics = request_metrics or RequestMetrics()
    # Read by the catch-all error handler, whose responses bypass the middleware
    app.state.security_headers = (
        dict(DEFAULT_SECURITY_HEADERS) if app_settings.SECURITY_HEADERS_ENABLED else {}
    )

    # =========================================================================
    # Middleware (last added runs first)
    # =========================================================================

    app.add_middleware(MetricsMiddleware, metrics=app.state.metrics)

    if app_settings.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=FixedWindowRateLimiter(
                limit=app_settings.RATE_LIMIT_REQUESTS,
                window_seconds=app_settings.RATE_LIMIT_WINDOW_SECONDS,
            ),
            trust_forwarded=app_settings.RATE_LIMIT_TRUST_FORWARDED,
        )

    if app_settings.SECURITY_HEADERS_ENABLED:
        app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(UserDirectoryException, user_directory_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health.router, tags=["Health"])
    app.include_router(metrics.router, tags=["Metrics"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(stats.router, prefix="/api", tags=["Stats"])

    return app


app = create_app()
