# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# Tests replace get_user_store via app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.metrics import RequestMetrics
from core.services.user_service import UserService
from lib.supabase_client import UserStore


def get_user_store() -> UserStore:
    """
    Get the users table adapter.

    The shared Supabase client is created by the first query, so a store
    that cannot be reached fails inside the operation that needed it.
    """
    return UserStore()


def get_user_service(store: Annotated[UserStore, Depends(get_user_store)]) -> UserService:
    """Get a UserService bound to the current store."""
    return UserService(store)


def get_metrics(request: Request) -> RequestMetrics:
    """
    Get the application's metrics registry.

    Created once by create_app() and kept on app.state.
    """
    return request.app.state.metrics


# Type aliases for dependency injection
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
MetricsDep = Annotated[RequestMetrics, Depends(get_metrics)]
