# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user CRUD operations and statistics.
# Separates HTTP concerns from database/business logic: routers call these
# methods and get back dicts or typed errors from app.exceptions.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import DuplicateKeyError, SupabaseClientError, UserStore
from core.models.user import UserCreate
from core.models.stats import RoleCount, StatsResponse
from core.runtime import server_info
from app.exceptions import EmailExistsError, StoreUnavailableError, UserNotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user management operations.

    Provides a clean interface between API routes and the store.
    """

    def __init__(self, store: UserStore):
        self.store = store

    def list_users(self) -> list[dict[str, Any]]:
        """
        List every user, newest first.

        Raises:
            StoreUnavailableError: If the store query fails
        """
        try:
            return self.store.find_all()
        except SupabaseClientError as e:
            logger.error(f"Error fetching users: {e}")
            raise StoreUnavailableError("Failed to fetch users") from e

    def create_user(self, user: UserCreate) -> dict[str, Any]:
        """
        Create a new user.

        The email is checked before the insert; the store's unique index
        still catches a concurrent insert of the same email.

        Returns:
            Created user dict with id and created_at

        Raises:
            EmailExistsError: If the email is already taken
            StoreUnavailableError: If the store fails
        """
        record = user.to_record()

        try:
            if self.store.find_by_email(record["email"]) is not None:
                raise EmailExistsError(record["email"])
            created = self.store.insert(record)
        except DuplicateKeyError as e:
            raise EmailExistsError(record["email"]) from e
        except SupabaseClientError as e:
            logger.error(f"Error creating user: {e}")
            raise StoreUnavailableError("Failed to create user") from e

        logger.info(f"Created user: {created['id']} ({created['role']})")
        return created

    def delete_user(self, user_id: str) -> None:
        """
        Delete a user by id.

        An id that is not a well-formed UUID cannot match any record and is
        reported as not found without querying the store.

        Raises:
            UserNotFoundError: If no user has that id
            StoreUnavailableError: If the store fails
        """
        try:
            normalized = str(UUID(user_id))
        except ValueError:
            raise UserNotFoundError(user_id)

        try:
            deleted = self.store.delete(normalized)
        except SupabaseClientError as e:
            logger.error(f"Error deleting user: {e}")
            raise StoreUnavailableError("Failed to delete user") from e

        if deleted is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Deleted user: {normalized}")

    def count_users(self) -> int:
        """
        Total number of users.

        Raises:
            StoreUnavailableError: If the count fails
        """
        try:
            return self.store.count()
        except SupabaseClientError as e:
            logger.error(f"Error counting users: {e}")
            raise StoreUnavailableError("Failed to count users") from e

    def get_stats(self) -> StatsResponse:
        """
        Build the statistics snapshot: total, per-role counts, process info.

        Roles are ordered by count (highest first), then by name.
        """
        try:
            total = self.store.count()
            by_role = self.store.count_by_role()
        except SupabaseClientError as e:
            logger.error(f"Error fetching stats: {e}")
            raise StoreUnavailableError("Failed to fetch stats") from e

        role_stats = [
            RoleCount(role=role, count=count)
            for role, count in sorted(by_role.items(), key=lambda item: (-item[1], item[0]))
        ]

        return StatsResponse(
            total_users=total,
            role_stats=role_stats,
            server_info=server_info(),
        )
