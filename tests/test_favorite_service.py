# =============================================================================
# tests/test_favorite_service.py - Favorites and Counter Tests
# =============================================================================
# The favorites rows and each portfolio's favorites_count must agree after
# every add, remove and toggle.
# =============================================================================

from uuid import uuid4

import pytest

from app.exceptions import AlreadyFavoritedError, FavoriteNotFoundError, PortfolioNotFoundError
from core.services.favorite_service import FavoriteService
from core.services.portfolio_service import PortfolioService


class TestAddFavorite:
    """Test favoriting."""

    def test_add_increments_count(self, backend, user_id):
        portfolio = backend.add_portfolio()

        favorite, count = FavoriteService.add_favorite(user_id, portfolio["id"])

        assert count == 1
        assert favorite["user_id"] == str(user_id)
        assert backend.portfolios[portfolio["id"]]["favorites_count"] == 1

    def test_duplicate_is_conflict(self, backend, user_id):
        portfolio = backend.add_portfolio()
        FavoriteService.add_favorite(user_id, portfolio["id"])

        with pytest.raises(AlreadyFavoritedError) as exc_info:
            FavoriteService.add_favorite(user_id, portfolio["id"])

        assert exc_info.value.status_code == 409
        assert backend.portfolios[portfolio["id"]]["favorites_count"] == 1
        assert len(backend.favorites) == 1

    def test_missing_portfolio(self, backend, user_id):
        with pytest.raises(PortfolioNotFoundError):
            FavoriteService.add_favorite(user_id, uuid4())
        assert backend.favorites == {}

    def test_count_per_portfolio(self, backend):
        portfolio = backend.add_portfolio()
        for _ in range(3):
            FavoriteService.add_favorite(uuid4(), portfolio["id"])
        assert backend.portfolios[portfolio["id"]]["favorites_count"] == 3


class TestRemoveFavorite:
    """Test unfavoriting."""

    def test_remove_decrements_count(self, backend, user_id):
        portfolio = backend.add_portfolio()
        favorite, _ = FavoriteService.add_favorite(user_id, portfolio["id"])

        _, count = FavoriteService.remove_favorite(user_id, favorite["id"])

        assert count == 0
        assert backend.favorites == {}

    def test_other_users_favorite_not_found(self, backend, user_id):
        portfolio = backend.add_portfolio()
        favorite, _ = FavoriteService.add_favorite(uuid4(), portfolio["id"])

        with pytest.raises(FavoriteNotFoundError):
            FavoriteService.remove_favorite(user_id, favorite["id"])

        assert favorite["id"] in backend.favorites

    def test_count_never_negative(self, backend, user_id):
        portfolio = backend.add_portfolio(favorites_count=0)
        favorite = backend.insert_favorite({"user_id": str(user_id), "portfolio_id": portfolio["id"]})

        _, count = FavoriteService.remove_favorite(user_id, favorite["id"])

        assert count == 0


class TestToggleFavorite:
    """Test the favorite button."""

    def test_toggle_on_then_off(self, backend, user_id):
        portfolio = backend.add_portfolio()

        on = FavoriteService.toggle_favorite(user_id, portfolio["id"])
        assert on["favorited"] is True
        assert on["favorites_count"] == 1
        assert on["favorite_id"] is not None

        off = FavoriteService.toggle_favorite(user_id, portfolio["id"])
        assert off["favorited"] is False
        assert off["favorites_count"] == 0
        assert off["favorite_id"] is None


class TestRecountFavorites:
    """Test counter repair."""

    def test_recount_fixes_drift(self, backend):
        portfolio = backend.add_portfolio(favorites_count=7)
        backend.insert_favorite({"user_id": str(uuid4()), "portfolio_id": portfolio["id"]})

        repaired = PortfolioService.recount_favorites(portfolio["id"])

        assert repaired["favorites_count"] == 1

    def test_recount_fills_missing_count(self, backend):
        portfolio = backend.add_portfolio(favorites_count=None)
        assert PortfolioService.recount_favorites(portfolio["id"])["favorites_count"] == 0
