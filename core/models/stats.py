# =============================================================================
# core/models/stats.py - Stats and Service Info Schemas
# =============================================================================
# Response models for the read-only informational endpoints:
# - StatsResponse: GET /api/stats
# - HealthResponse: GET /health
# - RootResponse: GET /
#
# Field names are camelCase on the wire to match the client contract.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class RoleCount(BaseModel):
    """Number of users holding one role."""
    role: str
    count: int = Field(..., ge=0)


class MemoryUsage(BaseModel):
    """Process memory figures in bytes (rss is None where unavailable)."""

    model_config = ConfigDict(populate_by_name=True)

    rss: int | None = None
    max_rss: int = Field(..., alias="maxRss")


class ServerInfo(BaseModel):
    """Ambient process information."""

    model_config = ConfigDict(populate_by_name=True)

    uptime: float = Field(..., description="Seconds since the process started")
    memory: MemoryUsage
    python_version: str = Field(..., alias="pythonVersion")


class StatsResponse(BaseModel):
    """
    User statistics.

    Example:
        {
            "totalUsers": 3,
            "roleStats": [{"role": "developer", "count": 2}, {"role": "admin", "count": 1}],
            "serverInfo": {"uptime": 12.5, "memory": {...}, "pythonVersion": "3.12.1"}
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(..., ge=0, alias="totalUsers")
    role_stats: list[RoleCount] = Field(default_factory=list, alias="roleStats")
    server_info: ServerInfo = Field(..., alias="serverInfo")


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    uptime: float
    memory: MemoryUsage


class RootResponse(BaseModel):
    """Service banner."""
    message: str
    version: str
    status: str
    timestamp: str
