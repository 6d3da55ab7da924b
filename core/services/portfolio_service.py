# =============================================================================
# core/services/portfolio_service.py - Portfolio Business Logic
# =============================================================================
# Read side of the directory plus the favorites_count bookkeeping.
# Publishing and editing (which touch storage) live in review_service.py.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.catalog import SortOption, filter_by_tag, sort_portfolios, unique_tags
from lib.supabase_client import SupabaseClient
from core.models.portfolio import PortfolioResponse
from core.services.storage_service import StorageService
from app.exceptions import PortfolioNotFoundError

logger = logging.getLogger(__name__)


class PortfolioService:
    """Service for listing portfolios and keeping their counters in shape."""

    @staticmethod
    def to_response(portfolio: dict[str, Any]) -> PortfolioResponse:
        """Build the API representation, resolving the image path to a URL."""
        return PortfolioResponse(
            **portfolio,
            image_url=StorageService.get_public_url(portfolio.get("image")),
        )

    @staticmethod
    def list_portfolios(
        tag: str | None = None,
        sort: SortOption = SortOption.RECENTLY_ADDED,
    ) -> tuple[list[dict[str, Any]], list[str]]:
        """
        List published portfolios.

        Args:
            tag: Optional tag filter ("All" or None shows everything)
            sort: Ordering to apply

        Returns:
            Tuple of (portfolios, every tag across the unfiltered directory)
        """
        portfolios = SupabaseClient.fetch_portfolios()
        tags = unique_tags(portfolios)
        filtered = filter_by_tag(portfolios, tag)
        return sort_portfolios(filtered, sort), tags

    @staticmethod
    def list_tags() -> list[str]:
        return unique_tags(SupabaseClient.fetch_portfolios())

    @staticmethod
    def get_portfolio(portfolio_id: UUID | str) -> dict[str, Any]:
        """
        Get a portfolio by ID.

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
        """
        portfolio = SupabaseClient.fetch_portfolio(portfolio_id)
        if not portfolio:
            raise PortfolioNotFoundError(str(portfolio_id))
        return portfolio

    @staticmethod
    def adjust_favorites_count(portfolio_id: UUID | str, delta: int) -> int:
        """
        Increment or decrement favorites_count by `delta`.

        This is a read-then-write against the managed backend; it is not
        atomic with the favorite row change. The count never drops below 0.

        Returns:
            The new count

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
        """
        portfolio = PortfolioService.get_portfolio(portfolio_id)
        current = portfolio.get("favorites_count") or 0
        new_count = max(0, current + delta)

        SupabaseClient.update_portfolio(portfolio_id, {"favorites_count": new_count})
        logger.debug(f"favorites_count for {portfolio_id}: {current} -> {new_count}")
        return new_count

    @staticmethod
    def recount_favorites(portfolio_id: UUID | str) -> dict[str, Any]:
        """
        Reset favorites_count to the number of favorite rows.

        Repairs drift left by a failed counter update.

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
        """
        portfolio = PortfolioService.get_portfolio(portfolio_id)
        actual = SupabaseClient.count_favorites_for_portfolio(portfolio_id)
        stored = portfolio.get("favorites_count") or 0

        if actual == stored and portfolio.get("favorites_count") is not None:
            return portfolio

        if actual != stored:
            logger.warning(
                f"favorites_count drift on portfolio {portfolio_id}: stored={stored} actual={actual}"
            )
        updated = SupabaseClient.update_portfolio(portfolio_id, {"favorites_count": actual})
        return updated or {**portfolio, "favorites_count": actual}
