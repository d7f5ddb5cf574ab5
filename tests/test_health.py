# =============================================================================
# tests/test_health.py - Banner and Health Check Tests
# =============================================================================

from datetime import datetime


class TestServiceEndpoints:
    """Tests for GET / and GET /health."""

    def test_root_banner(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert data["version"] == "1.0.0"
        assert data["message"]
        assert datetime.fromisoformat(data["timestamp"])

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        assert data["memory"]["maxRss"] > 0

    def test_health_does_not_touch_store(self, client, user_store):
        """Test that health stays green while the store is down."""
        user_store.available = False

        assert client.get("/health").status_code == 200
