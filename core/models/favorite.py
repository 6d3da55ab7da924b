# =============================================================================
# core/models/favorite.py - Favorite Schemas
# =============================================================================
# A favorite joins a user to a portfolio. Its presence means "favorited".
# The portfolio's favorites_count mirrors the number of these rows.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class FavoriteCreate(BaseModel):
    """Input for favoriting (or toggling) a portfolio."""

    portfolio_id: UUID = Field(..., description="Portfolio to favorite")


class FavoriteResponse(BaseModel):
    id: UUID
    created_at: datetime | None = None
    user_id: UUID
    portfolio_id: UUID


class FavoriteList(BaseModel):
    favorites: list[FavoriteResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class FavoriteToggleResponse(BaseModel):
    """State after a favorite button press."""

    portfolio_id: UUID
    favorited: bool
    favorite_id: UUID | None = None
    favorites_count: int = Field(..., ge=0)
