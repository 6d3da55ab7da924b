# =============================================================================
# app/routers/favorites.py - Favorites Endpoints
# =============================================================================
# A signed-in user's bookmarks. Every change also moves the portfolio's
# favorites_count, which is returned so clients can update the heart counter.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from core.models.favorite import (
    FavoriteCreate,
    FavoriteList,
    FavoriteResponse,
    FavoriteToggleResponse,
)
from core.services.favorite_service import FavoriteService

router = APIRouter()


@router.get("", response_model=FavoriteList)
async def list_favorites(
    user: AuthUser = Depends(get_current_user),
):
    """List the current user's favorites."""
    favorites = FavoriteService.list_favorites(user.id)
    return FavoriteList(
        favorites=[FavoriteResponse(**f) for f in favorites],
        total=len(favorites),
    )


@router.post("", status_code=201)
async def add_favorite(
    data: FavoriteCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Favorite a portfolio.

    Returns 409 if the user has already favorited it.
    """
    favorite, count = FavoriteService.add_favorite(user.id, data.portfolio_id)
    return {
        "favorite": FavoriteResponse(**favorite),
        "favorites_count": count,
    }


@router.delete("/{favorite_id}")
async def remove_favorite(
    favorite_id: Annotated[UUID, Path(description="Favorite UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Remove one of the current user's favorites."""
    favorite, count = FavoriteService.remove_favorite(user.id, favorite_id)
    return {
        "message": "Favorite removed",
        "portfolio_id": str(favorite["portfolio_id"]),
        "favorites_count": count,
    }


@router.post("/toggle", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    data: FavoriteCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Favorite the portfolio if it isn't already, otherwise unfavorite it."""
    return FavoriteToggleResponse(**FavoriteService.toggle_favorite(user.id, data.portfolio_id))
