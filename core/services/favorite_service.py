# =============================================================================
# core/services/favorite_service.py - Favorites Business Logic
# =============================================================================
# Keeps the favorites join table and each portfolio's favorites_count in
# step. The row change always happens first, then the counter; the two are
# separate backend calls with no transaction around them.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.services.portfolio_service import PortfolioService
from app.exceptions import AlreadyFavoritedError, FavoriteNotFoundError

logger = logging.getLogger(__name__)


class FavoriteService:
    """Service for user favorites."""

    @staticmethod
    def list_favorites(user_id: UUID | str) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_favorites_for_user(user_id)

    @staticmethod
    def add_favorite(
        user_id: UUID | str,
        portfolio_id: UUID | str,
    ) -> tuple[dict[str, Any], int]:
        """
        Favorite a portfolio.

        Returns:
            Tuple of (favorite row, new favorites_count)

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
            AlreadyFavoritedError: If the user already favorited it
        """
        PortfolioService.get_portfolio(portfolio_id)

        existing = SupabaseClient.fetch_user_favorite_for_portfolio(user_id, portfolio_id)
        if existing:
            raise AlreadyFavoritedError(str(portfolio_id), str(existing["id"]))

        favorite = SupabaseClient.insert_favorite({
            "user_id": str(user_id),
            "portfolio_id": str(portfolio_id),
        })
        count = PortfolioService.adjust_favorites_count(portfolio_id, +1)

        logger.info(f"User {user_id} favorited portfolio {portfolio_id} (count={count})")
        return favorite, count

    @staticmethod
    def remove_favorite(
        user_id: UUID | str,
        favorite_id: UUID | str,
    ) -> tuple[dict[str, Any], int]:
        """
        Remove one of the user's favorites.

        Returns:
            Tuple of (deleted favorite row, new favorites_count)

        Raises:
            FavoriteNotFoundError: If it doesn't exist or isn't the user's
        """
        favorite = SupabaseClient.fetch_favorite(favorite_id)

        # Don't reveal other users' favorites - return not found
        if not favorite or str(favorite.get("user_id")) != str(user_id):
            raise FavoriteNotFoundError(str(favorite_id))

        SupabaseClient.delete_favorite(favorite_id)
        count = PortfolioService.adjust_favorites_count(favorite["portfolio_id"], -1)

        logger.info(f"User {user_id} unfavorited portfolio {favorite['portfolio_id']} (count={count})")
        return favorite, count

    @staticmethod
    def toggle_favorite(
        user_id: UUID | str,
        portfolio_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Flip the favorite state of a portfolio for a user.

        Returns:
            Dict with portfolio_id, favorited, favorite_id and favorites_count
        """
        existing = SupabaseClient.fetch_user_favorite_for_portfolio(user_id, portfolio_id)

        if existing:
            _, count = FavoriteService.remove_favorite(user_id, existing["id"])
            return {
                "portfolio_id": str(portfolio_id),
                "favorited": False,
                "favorite_id": None,
                "favorites_count": count,
            }

        favorite, count = FavoriteService.add_favorite(user_id, portfolio_id)
        return {
            "portfolio_id": str(portfolio_id),
            "favorited": True,
            "favorite_id": favorite["id"],
            "favorites_count": count,
        }
