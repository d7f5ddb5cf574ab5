# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the User Directory API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_supabase_client.py: Store adapter tests with mocked query builders
# - test_user_service.py: Business logic against an in-memory store
# - test_users_api.py / test_health.py: Endpoint tests through the full app
# - test_metrics.py: Registry, route-template labeling and /metrics
# - test_middleware.py: Rate limiting, security headers, CORS
# - test_api_client.py: HTTP client
#
# Run tests with: pytest
# =============================================================================
