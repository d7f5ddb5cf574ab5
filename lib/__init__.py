# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase singleton and the users table adapter
# - api_client.py: HTTP client for the User Directory API
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    DuplicateKeyError,
    SupabaseClient,
    SupabaseClientError,
    UserStore,
)
from lib.api_client import ApiClientError, UserDirectoryClient

__all__ = [
    # Supabase
    "DuplicateKeyError",
    "SupabaseClient",
    "SupabaseClientError",
    "UserStore",
    # HTTP client
    "ApiClientError",
    "UserDirectoryClient",
]
