# =============================================================================
# app/routers/portfolios.py - Portfolio Directory Endpoints
# =============================================================================
# Reading the directory is public. Publishing, editing and counter repair
# require an admin. Write endpoints take multipart forms so the screenshot
# can travel with the fields.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Path, Query

from app.auth import AuthUser, require_admin
from app.dependencies import ImageDep, ImagePathDep, list_field_or_none
from core.models.portfolio import (
    PortfolioCreate,
    PortfolioList,
    PortfolioResponse,
    PortfolioUpdate,
)
from core.services.portfolio_service import PortfolioService
from core.services.review_service import ReviewService
from lib.catalog import ALL_TAGS, SortOption
from lib.utils import split_list_field

router = APIRouter()


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=PortfolioList)
async def list_portfolios(
    tag: Annotated[str | None, Query(description=f"Filter by tag ('{ALL_TAGS}' for everything)")] = None,
    sort: Annotated[SortOption, Query(description="Ordering")] = SortOption.RECENTLY_ADDED,
):
    """
    List published portfolios.

    `tags` in the response lists every tag in the directory, regardless of
    the active filter, so clients can render the filter chips.
    """
    portfolios, tags = PortfolioService.list_portfolios(tag=tag, sort=sort)

    return PortfolioList(
        portfolios=[PortfolioService.to_response(p) for p in portfolios],
        total=len(portfolios),
        tags=tags,
        tag=tag,
        sort=sort,
    )


@router.get("/tags")
async def list_tags():
    """Every distinct tag across published portfolios."""
    return {"tags": PortfolioService.list_tags()}


@router.get("/{portfolio_id}", response_model=PortfolioResponse)
async def get_portfolio(
    portfolio_id: Annotated[UUID, Path(description="Portfolio UUID")],
):
    portfolio = PortfolioService.get_portfolio(portfolio_id)
    return PortfolioService.to_response(portfolio)


# =============================================================================
# Admin Endpoints
# =============================================================================

@router.post("", response_model=PortfolioResponse, status_code=201)
async def create_portfolio(
    image: ImageDep,
    image_path: ImagePathDep,
    name: Annotated[str, Form()],
    link: Annotated[str, Form()],
    tags: Annotated[str, Form(description="Comma-separated")] = "",
    titles: Annotated[str, Form(description="Comma-separated")] = "",
    socials: Annotated[str, Form(description="Comma-separated")] = "",
    admin: AuthUser = Depends(require_admin),
):
    """
    Publish a portfolio directly, without a submission.

    Send the screenshot as `image`, or as `image_path` if it was uploaded
    through a signed URL from POST /uploads/url.
    """
    data = PortfolioCreate(
        name=name,
        link=link,
        tags=split_list_field(tags),
        titles=split_list_field(titles),
        socials=split_list_field(socials),
    )

    portfolio = ReviewService.create_portfolio(data, image=image, image_path=image_path)
    return PortfolioService.to_response(portfolio)


@router.patch("/{portfolio_id}", response_model=PortfolioResponse)
async def update_portfolio(
    portfolio_id: Annotated[UUID, Path(description="Portfolio UUID")],
    image: ImageDep,
    image_path: ImagePathDep,
    name: Annotated[str | None, Form()] = None,
    link: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form(description="Comma-separated")] = None,
    titles: Annotated[str | None, Form(description="Comma-separated")] = None,
    socials: Annotated[str | None, Form(description="Comma-separated")] = None,
    admin: AuthUser = Depends(require_admin),
):
    """
    Edit a portfolio. Fields not sent are left unchanged.

    A new image replaces the old one; the old object is removed from
    storage once the portfolio points at the new one.
    """
    update = PortfolioUpdate(
        name=name,
        link=link,
        tags=list_field_or_none(tags),
        titles=list_field_or_none(titles),
        socials=list_field_or_none(socials),
    )

    portfolio = ReviewService.update_portfolio(
        portfolio_id, update, image=image, image_path=image_path
    )
    return PortfolioService.to_response(portfolio)


@router.post("/{portfolio_id}/recount-favorites", response_model=PortfolioResponse)
async def recount_favorites(
    portfolio_id: Annotated[UUID, Path(description="Portfolio UUID")],
    admin: AuthUser = Depends(require_admin),
):
    """Reset favorites_count to the actual number of favorites."""
    portfolio = PortfolioService.recount_favorites(portfolio_id)
    return PortfolioService.to_response(portfolio)
