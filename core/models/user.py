# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Input for creating a new user
# - UserResponse: Output when returning a stored user to clients
# - UserRole: Enum for the fixed set of roles
#
# Users are never updated: a record is created once and later deleted.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator


class UserRole(str, Enum):
    """
    Roles a user can hold.

    Any other value is rejected at the API boundary and by the store's
    check constraint.
    """
    DEVELOPER = "developer"
    DESIGNER = "designer"
    MANAGER = "manager"
    ADMIN = "admin"


ALLOWED_ROLES: tuple[str, ...] = tuple(role.value for role in UserRole)

# Whitespace is stripped before the length check, so "   " counts as missing
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class UserCreate(BaseModel):
    """
    Schema for creating a new user.

    Example:
        {
            "name": "Ann",
            "email": "ann@x.com",
            "role": "designer"
        }
    """

    name: NonEmptyStr = Field(
        ...,
        max_length=255,
        description="Display name"
    )

    # Stored lower-cased so uniqueness is case-insensitive
    email: NonEmptyStr = Field(
        ...,
        max_length=320,
        description="Email address, unique across all users"
    )

    role: UserRole = Field(
        ...,
        description="One of developer, designer, manager, admin"
    )

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.lower()

    def to_record(self) -> dict[str, str]:
        """Columns to insert; id and created_at are assigned by the store."""
        return {
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }


class UserResponse(BaseModel):
    """
    Schema for returning a stored user to clients.

    Returned by:
    - POST /api/users (the created record)
    - GET /api/users (one entry per record, newest first)

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Ann",
            "email": "ann@x.com",
            "role": "designer",
            "createdAt": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID = Field(..., description="Store-assigned identifier")
    name: str
    email: str
    role: UserRole
    created_at: datetime = Field(
        ...,
        alias="createdAt",
        description="Timestamp when the user was created"
    )


class DeleteUserResponse(BaseModel):
    """Confirmation returned by DELETE /api/users/{user_id}."""
    message: str = "User deleted successfully"
