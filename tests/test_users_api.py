# =============================================================================
# tests/test_users_api.py - User Endpoint Tests
# =============================================================================
# Integration tests for /api/users and /api/stats through the full app
# (middleware, exception handlers, routers) with an in-memory store.
# =============================================================================

import uuid

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_user_store


# =============================================================================
# Create
# =============================================================================

class TestCreateUser:
    """Tests for POST /api/users."""

    def test_create_user(self, client, sample_user):
        """Test that a new user is created and returned with id and timestamp."""
        response = client.post("/api/users", json=sample_user)

        assert response.status_code == 201
        data = response.json()
        assert uuid.UUID(data["id"])
        assert data["name"] == "Ann"
        assert data["email"] == "ann@x.com"
        assert data["role"] == "designer"
        assert "createdAt" in data

    @pytest.mark.parametrize("missing", ["name", "email", "role"])
    def test_missing_field(self, client, sample_user, missing):
        """Test that each missing field is a 400 validation error."""
        del sample_user[missing]

        response = client.post("/api/users", json=sample_user)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Name, email, and role are required"
        assert body["code"] == "VALIDATION_ERROR"
        assert missing in body["details"]["fields"]

    def test_blank_field(self, client, sample_user):
        """Test that a whitespace-only name counts as missing."""
        sample_user["name"] = "   "

        response = client.post("/api/users", json=sample_user)

        assert response.status_code == 400
        assert response.json()["error"] == "Name, email, and role are required"

    def test_invalid_role(self, client, sample_user, user_store):
        """Test that an unknown role is rejected and nothing is stored."""
        sample_user["role"] = "intern"

        response = client.post("/api/users", json=sample_user)

        assert response.status_code == 400
        assert response.json()["error"].startswith("Role must be one of")
        assert user_store.count() == 0

    def test_duplicate_email(self, client, sample_user, user_store):
        """Test that a second user with the same email (any case) is rejected."""
        assert client.post("/api/users", json=sample_user).status_code == 201

        duplicate = dict(sample_user, name="Ann Two", email="ANN@x.com")
        response = client.post("/api/users", json=duplicate)

        assert response.status_code == 400
        assert response.json()["error"] == "Email already exists"
        assert response.json()["code"] == "EMAIL_EXISTS"
        assert user_store.count() == 1

    def test_store_unavailable(self, client, sample_user, user_store):
        """Test that store failures are a generic 500."""
        user_store.available = False

        response = client.post("/api/users", json=sample_user)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to create user"
        assert "Connection refused" not in response.text


# =============================================================================
# List / Delete
# =============================================================================

class TestListAndDelete:
    """Tests for GET /api/users and DELETE /api/users/{user_id}."""

    def test_list_empty(self, client):
        response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_scenario_new_user_listed_first(self, client, sample_user):
        """Test POST Ann then GET lists Ann first and stats count her."""
        client.post("/api/users", json={"name": "Bob", "email": "bob@x.com", "role": "developer"})
        created = client.post("/api/users", json=sample_user).json()

        users = client.get("/api/users").json()
        stats = client.get("/api/stats").json()

        assert users[0]["id"] == created["id"]
        assert users[0]["name"] == "Ann"
        assert stats["totalUsers"] == 2

    def test_delete_user(self, client, sample_user):
        created = client.post("/api/users", json=sample_user).json()

        response = client.delete(f"/api/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert client.get("/api/users").json() == []

    def test_delete_unknown_user(self, client, sample_user):
        """Test 404 for an unknown id; existing records are untouched."""
        client.post("/api/users", json=sample_user)

        response = client.delete(f"/api/users/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"
        assert len(client.get("/api/users").json()) == 1

    def test_delete_malformed_id(self, client):
        response = client.delete("/api/users/12345")

        assert response.status_code == 404

    def test_list_store_unavailable(self, client, user_store):
        user_store.available = False

        response = client.get("/api/users")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch users"


# =============================================================================
# Stats
# =============================================================================

class TestStats:
    """Tests for GET /api/stats."""

    def test_counts_after_creates_and_deletes(self, client):
        """Test totalUsers == creates - deletes, and the list agrees."""
        ids = []
        for i in range(5):
            response = client.post(
                "/api/users",
                json={"name": f"User {i}", "email": f"user{i}@x.com", "role": "developer"},
            )
            ids.append(response.json()["id"])
        for user_id in ids[:2]:
            assert client.delete(f"/api/users/{user_id}").status_code == 200

        stats = client.get("/api/stats").json()
        users = client.get("/api/users").json()

        assert stats["totalUsers"] == 3
        assert len(users) == 3
        assert [user["id"] for user in users] == list(reversed(ids[2:]))
        assert stats["roleStats"] == [{"role": "developer", "count": 3}]

    def test_server_info(self, client):
        info = client.get("/api/stats").json()["serverInfo"]

        assert info["uptime"] >= 0
        assert info["memory"]["maxRss"] > 0
        assert info["pythonVersion"]

    def test_store_unavailable(self, client, user_store):
        user_store.available = False

        response = client.get("/api/stats")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch stats"


# =============================================================================
# Generic Errors
# =============================================================================

class TestGenericErrors:
    """Tests for unmatched routes and unexpected failures."""

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found", "code": "ROUTE_NOT_FOUND"}

    def test_unexpected_error_hides_details(self, app):
        """Test that an uncaught exception becomes a generic 500."""

        class BrokenStore:
            def find_all(self):
                raise RuntimeError("secret internal detail")

        app.dependency_overrides[get_user_store] = lambda: BrokenStore()
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/users")

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!", "code": "INTERNAL_ERROR"}
        assert "secret" not in response.text
