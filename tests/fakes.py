# =============================================================================
# tests/fakes.py - In-Memory Test Doubles
# =============================================================================
# InMemoryUserStore mirrors UserStore's interface and error behaviour
# (DuplicateKeyError on a taken email, SupabaseClientError when "down")
# so the API can be exercised end to end without a database.
# =============================================================================

from __future__ import annotations

import uuid
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any

from lib.supabase_client import DuplicateKeyError, SupabaseClientError


class InMemoryUserStore:
    """Dict-backed users table with strictly increasing created_at values."""

    def __init__(self):
        self.rows: dict[str, dict[str, Any]] = {}
        self.available = True
        self._base_time = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
        self._inserted = 0

    def _check_available(self) -> None:
        if not self.available:
            raise SupabaseClientError("Connection refused", code="CONNECTION_FAILED")

    def find_all(self) -> list[dict[str, Any]]:
        self._check_available()
        return sorted(self.rows.values(), key=lambda row: row["created_at"], reverse=True)

    def find_by_email(self, email: str) -> dict[str, Any] | None:
        self._check_available()
        for row in self.rows.values():
            if row["email"] == email:
                return dict(row)
        return None

    def count(self) -> int:
        self._check_available()
        return len(self.rows)

    def count_by_role(self) -> dict[str, int]:
        self._check_available()
        return dict(Counter(row["role"] for row in self.rows.values()))

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        self._check_available()
        if any(row["email"] == record["email"] for row in self.rows.values()):
            raise DuplicateKeyError("duplicate key value violates unique constraint", code="DUPLICATE_KEY")

        self._inserted += 1
        row = {
            "id": str(uuid.uuid4()),
            **record,
            "created_at": (self._base_time + timedelta(seconds=self._inserted)).isoformat(),
        }
        self.rows[row["id"]] = row
        return dict(row)

    def delete(self, user_id: str) -> dict[str, Any] | None:
        self._check_available()
        return self.rows.pop(user_id, None)


class RacingUserStore(InMemoryUserStore):
    """Store where another request inserts the same email between check and insert."""

    def find_by_email(self, email: str) -> dict[str, Any] | None:
        return None
