# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides the persistence adapter for user records.
# - SupabaseClient: lazily-created singleton connection
# - UserStore: the only operations the API needs against the users table
#   (insert, find all sorted, find by email, delete by id, count, count by role)
#
# Usage:
#   from lib.supabase_client import UserStore
#   store = UserStore()  # uses the shared SupabaseClient
#   users = store.find_all()
# =============================================================================

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from supabase import Client, create_client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgreSQL error code for unique_violation
UNIQUE_VIOLATION = "23505"

USER_COLUMNS = "id, name, email, role, created_at"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: what failed, and how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DuplicateKeyError(SupabaseClientError):
    """Raised when an insert violates a unique constraint."""


def _is_unique_violation(error: Exception) -> bool:
    # postgrest.APIError exposes the Postgres SQLSTATE as .code
    code = getattr(error, "code", None)
    if code == UNIQUE_VIOLATION:
        return True
    return UNIQUE_VIOLATION in str(error) or "duplicate key" in str(error)


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    One client instance is shared across the application. It is created on
    first use, so importing this module never opens a connection.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client; the next get_client() creates a new one."""
        cls._instance = None


class UserStore:
    """
    Persistence adapter for the users table.

    Every method either returns plain dicts (rows as the store returns them)
    or raises SupabaseClientError. Full-table reads are fetched in pages of
    page_size rows.

    Example:
        store = UserStore()
        row = store.insert({"name": "Ann", "email": "ann@x.com", "role": "designer"})
        store.delete(row["id"])
    """

    # Rows per request; PostgREST truncates unranged selects at max-rows
    page_size = 1000

    def __init__(self, client: Client | None = None, table: str | None = None):
        self._client = client
        self.table = table or settings.USERS_TABLE

    def _query(self):
        # Without an explicit client the shared one is created on first query,
        # so connection failures surface as this operation's SupabaseClientError
        client = self._client or SupabaseClient.get_client()
        return client.table(self.table)

    def _select_all(self, build_query) -> list[dict[str, Any]]:
        """Run build_query() page by page until a short page comes back."""
        rows: list[dict[str, Any]] = []
        start = 0
        while True:
            response = build_query().range(start, start + self.page_size - 1).execute()
            page = response.data or []
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_all(self) -> list[dict[str, Any]]:
        """
        Fetch every user, newest first.

        Raises:
            SupabaseClientError: If query fails
        """
        try:
            users = self._select_all(
                lambda: self._query()
                .select(USER_COLUMNS)
                .order("created_at", desc=True)
                .order("id")
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch users: {e}",
                code="FETCH_USERS_FAILED",
                suggestion=f"Check that the {self.table} table exists and is accessible",
            ) from e

        logger.debug(f"Fetched {len(users)} users")
        return users

    def find_by_email(self, email: str) -> dict[str, Any] | None:
        """
        Fetch the user with this (already normalized) email.

        Returns:
            User dict, or None if no user has that email
        """
        try:
            response = (
                self._query()
                .select(USER_COLUMNS)
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to look up email: {e}",
                code="FETCH_USER_FAILED",
                details={"email": email},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    def count(self) -> int:
        """Total number of stored users."""
        try:
            response = (
                self._query()
                .select("id", count="exact", head=True)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count users: {e}",
                code="COUNT_USERS_FAILED",
            ) from e

        return response.count or 0

    def count_by_role(self) -> dict[str, int]:
        """
        Number of users per role.

        PostgREST has no GROUP BY without enabling aggregates, so only the
        role column is fetched and the grouping happens here.

        Returns:
            Mapping of role -> count; roles with no users are absent
        """
        try:
            rows = self._select_all(lambda: self._query().select("role").order("id"))
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to aggregate roles: {e}",
                code="AGGREGATE_ROLES_FAILED",
            ) from e

        return dict(Counter(row["role"] for row in rows))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new user.

        Returns:
            Inserted user dict with generated id and created_at

        Raises:
            DuplicateKeyError: If the email is already taken
            SupabaseClientError: If insert fails for any other reason
        """
        try:
            response = self._query().insert(record).execute()
        except Exception as e:
            if _is_unique_violation(e):
                raise DuplicateKeyError(
                    message=f"Duplicate key: {e}",
                    code="DUPLICATE_KEY",
                    details={"email": record.get("email")},
                ) from e
            raise SupabaseClientError(
                message=f"Failed to insert user: {e}",
                code="INSERT_USER_FAILED",
            ) from e

        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message="Insert returned no data",
            code="INSERT_NO_DATA",
        )

    def delete(self, user_id: str) -> dict[str, Any] | None:
        """
        Delete a user by id.

        Returns:
            The deleted user dict, or None if no user had that id
        """
        try:
            response = (
                self._query()
                .delete()
                .eq("id", user_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete user: {e}",
                code="DELETE_USER_FAILED",
                details={"user_id": user_id},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None
