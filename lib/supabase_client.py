# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Portfolios (the published directory)
# - Submissions (user proposals awaiting review)
# - Favorites (user bookmarks, joined to portfolios)
# - Users (admin flag lookups)
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   portfolios = SupabaseClient.fetch_portfolios()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"

PORTFOLIOS_TABLE = "portfolios"
SUBMISSIONS_TABLE = "submissions"
FAVORITES_TABLE = "favorites"
USERS_TABLE = "users"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and a suggestion so callers can tell the user how to
    fix the problem, not only what failed.
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

    def to_dict(self) -> dict[str, Any]:
        result = {"detail": self.message, "code": self.code}
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        portfolio = SupabaseClient.fetch_portfolio("550e8400-...")
        if portfolio is None:
            ...  # PGRST116, no such row
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations; ownership and admin
        checks happen in the service layer instead.

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
                )
        return cls._instance

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return normalize_uuid(uuid_value)

    # -------------------------------------------------------------------------
    # Generic row helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _fetch_by_id(cls, table: str, row_id: str | UUID, code: str) -> dict[str, Any] | None:
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select("*")
                .eq("id", row_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code=code,
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def _insert(cls, table: str, data: dict[str, Any], code: str) -> dict[str, Any]:
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code=code,
                suggestion=f"Check that the {table} table exists and the payload matches its columns",
            )

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code=code,
            )

        row = response.data[0]
        logger.debug(f"Inserted {table} row {row.get('id')}")
        return row

    @classmethod
    def _update(
        cls,
        table: str,
        row_id: str | UUID,
        data: dict[str, Any],
        code: str,
    ) -> dict[str, Any] | None:
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", row_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code=code,
                details={"table": table, "id": row_id_str}
            )

        return response.data[0] if response.data else None

    @classmethod
    def _delete(cls, table: str, row_id: str | UUID, code: str) -> bool:
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .delete()
                .eq("id", row_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete {table} row: {e}",
                code=code,
                details={"table": table, "id": row_id_str}
            )

        return bool(response.data)

    # -------------------------------------------------------------------------
    # Portfolio Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_portfolios(cls) -> list[dict[str, Any]]:
        """
        Fetch every published portfolio, newest first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(PORTFOLIOS_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            portfolios = response.data or []
            logger.debug(f"Fetched {len(portfolios)} portfolios")
            return portfolios

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch portfolios: {e}",
                code="FETCH_PORTFOLIOS_FAILED",
                suggestion="Check that the portfolios table is accessible",
            )

    @classmethod
    def fetch_portfolio(cls, portfolio_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a portfolio by ID, or None if it doesn't exist."""
        return cls._fetch_by_id(PORTFOLIOS_TABLE, portfolio_id, "FETCH_PORTFOLIO_FAILED")

    @classmethod
    def insert_portfolio(cls, data: dict[str, Any]) -> dict[str, Any]:
        return cls._insert(PORTFOLIOS_TABLE, data, "INSERT_PORTFOLIO_FAILED")

    @classmethod
    def update_portfolio(
        cls,
        portfolio_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        return cls._update(PORTFOLIOS_TABLE, portfolio_id, data, "UPDATE_PORTFOLIO_FAILED")

    @classmethod
    def delete_portfolio(cls, portfolio_id: str | UUID) -> bool:
        return cls._delete(PORTFOLIOS_TABLE, portfolio_id, "DELETE_PORTFOLIO_FAILED")

    # -------------------------------------------------------------------------
    # Submission Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_submissions(cls, status: str | None = None) -> list[dict[str, Any]]:
        """
        Fetch submissions, newest first.

        Args:
            status: Optional status filter ("pending" or "completed")

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(SUBMISSIONS_TABLE).select("*")
            if status:
                query = query.eq("status", status)
            response = query.order("created_at", desc=True).execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch submissions: {e}",
                code="FETCH_SUBMISSIONS_FAILED",
                suggestion="Check that the submissions table is accessible",
                details={"status": status}
            )

    @classmethod
    def fetch_submission(cls, submission_id: str | UUID) -> dict[str, Any] | None:
        return cls._fetch_by_id(SUBMISSIONS_TABLE, submission_id, "FETCH_SUBMISSION_FAILED")

    @classmethod
    def insert_submission(cls, data: dict[str, Any]) -> dict[str, Any]:
        return cls._insert(SUBMISSIONS_TABLE, data, "INSERT_SUBMISSION_FAILED")

    @classmethod
    def update_submission(
        cls,
        submission_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        return cls._update(SUBMISSIONS_TABLE, submission_id, data, "UPDATE_SUBMISSION_FAILED")

    @classmethod
    def delete_submission(cls, submission_id: str | UUID) -> bool:
        return cls._delete(SUBMISSIONS_TABLE, submission_id, "DELETE_SUBMISSION_FAILED")

    # -------------------------------------------------------------------------
    # Favorite Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_favorites_for_user(cls, user_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch all favorites owned by a user.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table(FAVORITES_TABLE)
                .select("*")
                .eq("user_id", user_id_str)
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch favorites: {e}",
                code="FETCH_FAVORITES_FAILED",
                details={"user_id": user_id_str}
            )

    @classmethod
    def fetch_favorite(cls, favorite_id: str | UUID) -> dict[str, Any] | None:
        return cls._fetch_by_id(FAVORITES_TABLE, favorite_id, "FETCH_FAVORITE_FAILED")

    @classmethod
    def fetch_user_favorite_for_portfolio(
        cls,
        user_id: str | UUID,
        portfolio_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Find the favorite row joining a user to a portfolio, if any.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)
        portfolio_id_str = cls._normalize_uuid(portfolio_id)

        try:
            response = (
                client.table(FAVORITES_TABLE)
                .select("*")
                .eq("user_id", user_id_str)
                .eq("portfolio_id", portfolio_id_str)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to look up favorite: {e}",
                code="FETCH_FAVORITE_FAILED",
                details={"user_id": user_id_str, "portfolio_id": portfolio_id_str}
            )

    @classmethod
    def count_favorites_for_portfolio(cls, portfolio_id: str | UUID) -> int:
        """
        Count favorite rows pointing at a portfolio.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        portfolio_id_str = cls._normalize_uuid(portfolio_id)

        try:
            response = (
                client.table(FAVORITES_TABLE)
                .select("id", count="exact")
                .eq("portfolio_id", portfolio_id_str)
                .execute()
            )
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count favorites: {e}",
                code="COUNT_FAVORITES_FAILED",
                details={"portfolio_id": portfolio_id_str}
            )

    @classmethod
    def insert_favorite(cls, data: dict[str, Any]) -> dict[str, Any]:
        return cls._insert(FAVORITES_TABLE, data, "INSERT_FAVORITE_FAILED")

    @classmethod
    def delete_favorite(cls, favorite_id: str | UUID) -> bool:
        return cls._delete(FAVORITES_TABLE, favorite_id, "DELETE_FAVORITE_FAILED")

    # -------------------------------------------------------------------------
    # User Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """Fetch a row from public.users, or None if the trigger hasn't created it yet."""
        return cls._fetch_by_id(USERS_TABLE, user_id, "FETCH_USER_FAILED")
