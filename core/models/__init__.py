# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User create/response schemas and the role enum
# - stats.py: Stats, health and banner response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    ALLOWED_ROLES,
    DeleteUserResponse,
    UserCreate,
    UserResponse,
    UserRole,
)

# -----------------------------------------------------------------------------
# Stats Models
# -----------------------------------------------------------------------------
from .stats import (
    HealthResponse,
    MemoryUsage,
    RoleCount,
    RootResponse,
    ServerInfo,
    StatsResponse,
)

__all__ = [
    # User
    "ALLOWED_ROLES",
    "DeleteUserResponse",
    "UserCreate",
    "UserResponse",
    "UserRole",
    # Stats
    "HealthResponse",
    "MemoryUsage",
    "RoleCount",
    "RootResponse",
    "ServerInfo",
    "StatsResponse",
]
