# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory store and a TestClient wired to it
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.dependencies import get_user_store
from app.main import create_app
from tests.fakes import InMemoryUserStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def user_store():
    """Empty in-memory users table."""
    return InMemoryUserStore()


@pytest.fixture
def app_settings():
    """Environment settings with rate limiting off."""
    return get_settings().model_copy(update={"RATE_LIMIT_ENABLED": False})


@pytest.fixture
def app(user_store, app_settings):
    """Fresh application (and metrics registry) backed by the in-memory store."""
    application = create_app(app_settings)
    application.dependency_overrides[get_user_store] = lambda: user_store
    return application


@pytest.fixture
def client(app):
    """TestClient for the application."""
    return TestClient(app)


@pytest.fixture
def sample_user():
    """Valid create-user payload."""
    return {"name": "Ann", "email": "ann@x.com", "role": "designer"}
