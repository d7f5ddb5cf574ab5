# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the API models to ensure:
# - Valid data is accepted and normalized
# - Invalid data raises ValidationError
# - Responses serialize with the camelCase field names clients expect
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID

import pytest
from pydantic import ValidationError

from core.models import (
    ALLOWED_ROLES,
    MemoryUsage,
    RoleCount,
    ServerInfo,
    StatsResponse,
    UserCreate,
    UserResponse,
    UserRole,
)


# =============================================================================
# UserCreate Tests
# =============================================================================

class TestUserCreate:
    """Tests for UserCreate model."""

    def test_valid_user(self):
        """Test creating a valid UserCreate."""
        user = UserCreate(name="Ann", email="ann@x.com", role="designer")

        assert user.name == "Ann"
        assert user.email == "ann@x.com"
        assert user.role == UserRole.DESIGNER

    def test_email_is_lowercased_and_trimmed(self):
        """Test that emails are normalized for case-insensitive uniqueness."""
        user = UserCreate(name="  Ann  ", email="  Ann@X.COM ", role="admin")

        assert user.name == "Ann"
        assert user.email == "ann@x.com"

    @pytest.mark.parametrize("role", ALLOWED_ROLES)
    def test_every_allowed_role_accepted(self, role):
        """Test that all four roles are valid."""
        assert UserCreate(name="Ann", email="ann@x.com", role=role).role.value == role

    @pytest.mark.parametrize("role", ["tester", "Developer", "", "ADMIN "])
    def test_unknown_role_rejected(self, role):
        """Test that any other role value is rejected."""
        with pytest.raises(ValidationError):
            UserCreate(name="Ann", email="ann@x.com", role=role)

    @pytest.mark.parametrize("field", ["name", "email", "role"])
    def test_missing_field_rejected(self, field):
        """Test that each field is required."""
        data = {"name": "Ann", "email": "ann@x.com", "role": "designer"}
        del data[field]

        with pytest.raises(ValidationError):
            UserCreate(**data)

    def test_blank_name_rejected(self):
        """Test that whitespace-only values count as missing."""
        with pytest.raises(ValidationError):
            UserCreate(name="   ", email="ann@x.com", role="designer")

    def test_to_record(self):
        """Test the insert payload leaves id and created_at to the store."""
        record = UserCreate(name="Ann", email="ANN@x.com", role="manager").to_record()

        assert record == {"name": "Ann", "email": "ann@x.com", "role": "manager"}


# =============================================================================
# UserResponse Tests
# =============================================================================

class TestUserResponse:
    """Tests for UserResponse model."""

    def test_from_store_row(self):
        """Test parsing a row as the store returns it."""
        row = {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Ann",
            "email": "ann@x.com",
            "role": "designer",
            "created_at": "2024-01-15T10:30:00+00:00",
        }

        user = UserResponse.model_validate(row)

        assert user.id == UUID("550e8400-e29b-41d4-a716-446655440000")
        assert user.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_serializes_created_at_as_camel_case(self):
        """Test that clients receive createdAt."""
        user = UserResponse(
            id="550e8400-e29b-41d4-a716-446655440000",
            name="Ann",
            email="ann@x.com",
            role="designer",
            created_at="2024-01-15T10:30:00Z",
        )

        data = user.model_dump(by_alias=True, mode="json")

        assert "createdAt" in data
        assert "created_at" not in data
        assert data["role"] == "designer"


# =============================================================================
# StatsResponse Tests
# =============================================================================

class TestStatsResponse:
    """Tests for StatsResponse model."""

    def test_serializes_with_aliases(self):
        """Test the wire format of the stats payload."""
        stats = StatsResponse(
            total_users=3,
            role_stats=[RoleCount(role="developer", count=2), RoleCount(role="admin", count=1)],
            server_info=ServerInfo(
                uptime=1.5,
                memory=MemoryUsage(rss=1024, max_rss=2048),
                python_version="3.12.0",
            ),
        )

        data = stats.model_dump(by_alias=True)

        assert data["totalUsers"] == 3
        assert data["roleStats"][0] == {"role": "developer", "count": 2}
        assert data["serverInfo"]["pythonVersion"] == "3.12.0"
        assert data["serverInfo"]["memory"]["maxRss"] == 2048

    def test_negative_total_rejected(self):
        """Test that totalUsers can't be negative."""
        with pytest.raises(ValidationError):
            StatsResponse(
                total_users=-1,
                server_info=ServerInfo(
                    uptime=0.0,
                    memory=MemoryUsage(max_rss=0),
                    python_version="3.12.0",
                ),
            )
