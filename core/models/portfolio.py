# =============================================================================
# core/models/portfolio.py - Portfolio Schemas
# =============================================================================
# These models define the API contract for the published directory:
# - PortfolioCreate: Admin input when publishing (directly or by approval)
# - PortfolioUpdate: Admin edits; only provided fields change
# - PortfolioResponse: Output with a resolved public image URL
# - PortfolioList: Listing with the tag chips for filtering
#
# A portfolio's `image` is the storage path of its screenshot. The image is
# replaced by uploading the new object before deleting the old one.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from lib.catalog import SortOption

from .submission import SubmissionResponse, clean_tags


class PortfolioCreate(BaseModel):
    """
    Schema for publishing a portfolio.

    Example:
        {
            "name": "Jane Doe",
            "link": "https://janedoe.dev",
            "tags": ["Developer"],
            "titles": ["Frontend Engineer"],
            "socials": ["https://github.com/janedoe"]
        }
    """

    name: str = Field(..., min_length=2, max_length=50)
    link: HttpUrl
    tags: list[str] = Field(default_factory=list)
    titles: list[str] = Field(default_factory=list)
    socials: list[str] = Field(default_factory=list)

    @field_validator("tags", "titles", "socials")
    @classmethod
    def normalize_lists(cls, value):
        return clean_tags(value)


class PortfolioUpdate(BaseModel):
    """Admin edits to a portfolio. Fields left as None are not touched."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    link: HttpUrl | None = None
    tags: list[str] | None = None
    titles: list[str] | None = None
    socials: list[str] | None = None

    @field_validator("tags", "titles", "socials")
    @classmethod
    def normalize_lists(cls, value):
        return clean_tags(value)


class PortfolioResponse(BaseModel):
    """Schema for returning portfolio data to clients."""

    id: UUID = Field(..., description="Unique portfolio identifier")
    created_at: datetime | None = None
    name: str
    link: str
    tags: list[str] = Field(default_factory=list)
    titles: list[str] = Field(default_factory=list)
    socials: list[str] = Field(default_factory=list)
    image: str | None = Field(default=None, description="Storage path of the screenshot")
    image_url: str | None = Field(default=None, description="Public URL of the screenshot")
    favorites_count: int = Field(default=0, ge=0)

    @field_validator("tags", "titles", "socials", mode="before")
    @classmethod
    def lists_default(cls, value):
        return value or []

    @field_validator("favorites_count", mode="before")
    @classmethod
    def count_default(cls, value):
        return value or 0


class PortfolioList(BaseModel):
    """Response for the public directory listing."""

    portfolios: list[PortfolioResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    tags: list[str] = Field(default_factory=list, description="Every tag available for filtering")
    tag: str | None = Field(default=None, description="Active tag filter")
    sort: SortOption = SortOption.RECENTLY_ADDED


class ApprovalResponse(BaseModel):
    """Result of approving a submission."""

    submission: SubmissionResponse
    portfolio: PortfolioResponse
