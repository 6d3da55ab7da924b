# =============================================================================
# app/routers/submissions.py - Submission Review Endpoints
# =============================================================================
# Any signed-in user can propose a portfolio. Everything else here is the
# admin review queue: list, edit, approve (publish) or delete (reject).
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Path, Query

from app.auth import AuthUser, get_current_user, require_admin
from app.dependencies import ImageDep, ImagePathDep, list_field_or_none
from core.models.portfolio import ApprovalResponse, PortfolioCreate
from core.models.submission import (
    SubmissionCreate,
    SubmissionList,
    SubmissionResponse,
    SubmissionStatus,
    SubmissionUpdate,
)
from core.services.portfolio_service import PortfolioService
from core.services.review_service import ReviewService
from core.services.submission_service import SubmissionService
from lib.utils import split_list_field

router = APIRouter()


@router.post("", response_model=SubmissionResponse, status_code=201)
async def create_submission(
    data: SubmissionCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Propose a portfolio for the directory. It starts out pending."""
    submission = SubmissionService.create_submission(user.id, data)
    return SubmissionResponse(**submission)


@router.get("", response_model=SubmissionList)
async def list_submissions(
    status: Annotated[SubmissionStatus | None, Query(description="Filter by status")] = None,
    admin: AuthUser = Depends(require_admin),
):
    """List submissions, newest first."""
    submissions = SubmissionService.list_submissions(status=status)
    return SubmissionList(
        submissions=[SubmissionResponse(**s) for s in submissions],
        total=len(submissions),
    )


@router.get("/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: Annotated[UUID, Path(description="Submission UUID")],
    admin: AuthUser = Depends(require_admin),
):
    return SubmissionResponse(**SubmissionService.get_submission(submission_id))


@router.patch("/{submission_id}", response_model=SubmissionResponse)
async def update_submission(
    submission_id: Annotated[UUID, Path(description="Submission UUID")],
    update: SubmissionUpdate,
    admin: AuthUser = Depends(require_admin),
):
    """Correct a pending submission's name, link or tags during review."""
    submission = SubmissionService.update_submission(submission_id, update)
    return SubmissionResponse(**submission)


@router.post("/{submission_id}/approve", response_model=ApprovalResponse, status_code=201)
async def approve_submission(
    submission_id: Annotated[UUID, Path(description="Submission UUID")],
    image: ImageDep,
    image_path: ImagePathDep,
    name: Annotated[str | None, Form(description="Defaults to the submitted name")] = None,
    link: Annotated[str | None, Form(description="Defaults to the submitted link")] = None,
    tags: Annotated[str | None, Form(description="Comma-separated; defaults to the submitted tags")] = None,
    titles: Annotated[str, Form(description="Comma-separated")] = "",
    socials: Annotated[str, Form(description="Comma-separated")] = "",
    admin: AuthUser = Depends(require_admin),
):
    """
    Approve a pending submission and publish it as a portfolio.

    A screenshot is required, either as `image` or as `image_path`.
    The submission is marked completed with the reviewed name and link.
    """
    submission = SubmissionService.get_submission(submission_id)
    reviewed_tags = list_field_or_none(tags)

    data = PortfolioCreate(
        name=name or submission["name"],
        link=link or submission["link"],
        tags=(submission.get("tags") or []) if reviewed_tags is None else reviewed_tags,
        titles=split_list_field(titles),
        socials=split_list_field(socials),
    )

    completed, portfolio = ReviewService.approve_submission(
        submission_id, data, image=image, image_path=image_path
    )

    return ApprovalResponse(
        submission=SubmissionResponse(**completed),
        portfolio=PortfolioService.to_response(portfolio),
    )


@router.delete("/{submission_id}")
async def delete_submission(
    submission_id: Annotated[UUID, Path(description="Submission UUID")],
    admin: AuthUser = Depends(require_admin),
):
    """Reject a pending submission. Completed submissions can't be deleted."""
    SubmissionService.delete_submission(submission_id)
    return {"message": "Submission deleted", "submission_id": str(submission_id)}
