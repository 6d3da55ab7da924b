# =============================================================================
# core/services/user_service.py - User Lookups
# =============================================================================
# Reads profile rows from public.users. The admin flag lives there; the
# identity itself comes from the Supabase Auth JWT.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class UserService:
    """Service for user profile and privilege lookups."""

    @staticmethod
    def get_user(user_id: UUID | str) -> dict[str, Any] | None:
        """
        Get the public.users row for a user.

        Returns None when the row hasn't been created yet (the signup
        trigger may lag behind the first request).
        """
        return SupabaseClient.fetch_user(user_id)

    @staticmethod
    def is_admin(user_id: UUID | str) -> bool:
        """
        Check whether a user carries the admin flag.

        Unknown users are never admins.
        """
        user = UserService.get_user(user_id)
        if not user:
            logger.debug(f"No profile row for user {user_id}; treating as non-admin")
            return False
        return user.get("is_admin") is True
