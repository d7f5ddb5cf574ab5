# =============================================================================
# lib/api_client.py - HTTP Client for the User Directory API
# =============================================================================
# Thin synchronous client used by the console script (and usable from any
# Python code) to drive the same HTTP surface as the web UI.
#
# Usage:
#   from lib.api_client import UserDirectoryClient
#   with UserDirectoryClient("http://localhost:5000") as client:
#       client.create_user("Ann", "ann@x.com", "designer")
#       users = client.list_users()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """
    Error returned by the API, or failure to reach it.

    Attributes:
        status_code: HTTP status, or None if the request never completed
        message: The server's error message when it sent one
        code: The server's machine-readable error code, if any
    """

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code}] {self.message}"


class UserDirectoryClient:
    """
    Client for the user endpoints.

    Accepts an existing httpx.Client (e.g. FastAPI's TestClient) instead of
    a base URL, in which case the caller owns that client.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def __enter__(self) -> UserDirectoryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def list_users(self) -> list[dict[str, Any]]:
        """All users, newest first."""
        return self._request("GET", "/api/users")

    def create_user(self, name: str, email: str, role: str) -> dict[str, Any]:
        """Create a user and return the stored record."""
        return self._request(
            "POST",
            "/api/users",
            json={"name": name, "email": email, "role": role},
        )

    def delete_user(self, user_id: str) -> str:
        """Delete a user and return the server's confirmation message."""
        payload = self._request("DELETE", f"/api/users/{user_id}")
        return payload.get("message", "")

    def get_stats(self) -> dict[str, Any]:
        """Total count, per-role counts and server info."""
        return self._request("GET", "/api/stats")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiClientError(f"Failed to contact the API: {exc}") from exc

        if response.is_success:
            return response.json()

        message = response.text.strip() or response.reason_phrase
        code = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            message = payload.get("error", message)
            code = payload.get("code")

        logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
        raise ApiClientError(message, status_code=response.status_code, code=code)
