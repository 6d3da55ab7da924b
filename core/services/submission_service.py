# =============================================================================
# core/services/submission_service.py - Submission Business Logic
# =============================================================================
# Handles submission CRUD operations for the review queue.
# Approval (which also publishes a portfolio) lives in review_service.py.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.submission import SubmissionCreate, SubmissionStatus, SubmissionUpdate
from app.exceptions import SubmissionAlreadyReviewedError, SubmissionNotFoundError

logger = logging.getLogger(__name__)


class SubmissionService:
    """
    Service for submission management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def create_submission(
        user_id: UUID | str,
        submission: SubmissionCreate,
    ) -> dict[str, Any]:
        """
        Create a new submission awaiting review.

        Args:
            user_id: The user proposing the portfolio
            submission: Validated name, link and tags

        Returns:
            Created submission dict with status "pending"
        """
        data = {
            "user_id": str(user_id),
            "name": submission.name,
            "link": str(submission.link),
            "tags": submission.tags,
            "status": SubmissionStatus.PENDING.value,
        }

        created = SupabaseClient.insert_submission(data)
        logger.info(f"Created submission: {created['id']} for user: {user_id}")
        return created

    @staticmethod
    def list_submissions(
        status: SubmissionStatus | None = None,
    ) -> list[dict[str, Any]]:
        """List submissions, newest first, optionally filtered by status."""
        return SupabaseClient.fetch_submissions(status.value if status else None)

    @staticmethod
    def get_submission(submission_id: UUID | str) -> dict[str, Any]:
        """
        Get a submission by ID.

        Raises:
            SubmissionNotFoundError: If submission doesn't exist
        """
        submission = SupabaseClient.fetch_submission(submission_id)
        if not submission:
            raise SubmissionNotFoundError(str(submission_id))
        return submission

    @staticmethod
    def update_submission(
        submission_id: UUID | str,
        update: SubmissionUpdate,
    ) -> dict[str, Any]:
        """
        Apply admin edits to a pending submission.

        Returns:
            Updated submission dict (unchanged when nothing was provided)

        Raises:
            SubmissionNotFoundError: If submission doesn't exist
            SubmissionAlreadyReviewedError: If it was already approved
        """
        submission = SubmissionService.get_submission(submission_id)

        if submission.get("status") != SubmissionStatus.PENDING.value:
            raise SubmissionAlreadyReviewedError(str(submission_id), submission.get("status"))

        update_data = update.model_dump(exclude_none=True, mode="json")
        if not update_data:
            return submission  # Nothing to update

        updated = SupabaseClient.update_submission(submission_id, update_data)
        logger.info(f"Updated submission: {submission_id} fields={sorted(update_data)}")
        return updated or {**submission, **update_data}

    @staticmethod
    def mark_completed(
        submission_id: UUID | str,
        name: str,
        link: str,
    ) -> dict[str, Any]:
        """Record the reviewed name and link and close the submission."""
        data = {
            "name": name,
            "link": link,
            "status": SubmissionStatus.COMPLETED.value,
        }
        updated = SupabaseClient.update_submission(submission_id, data)
        logger.info(f"Marked submission completed: {submission_id}")
        if updated is None:
            raise SubmissionNotFoundError(str(submission_id))
        return updated

    @staticmethod
    def delete_submission(submission_id: UUID | str) -> None:
        """
        Delete a pending submission (reject it).

        Raises:
            SubmissionNotFoundError: If submission doesn't exist
            SubmissionAlreadyReviewedError: If it was already approved
        """
        submission = SubmissionService.get_submission(submission_id)

        if submission.get("status") != SubmissionStatus.PENDING.value:
            raise SubmissionAlreadyReviewedError(str(submission_id), submission.get("status"))

        SupabaseClient.delete_submission(submission_id)
        logger.info(f"Deleted submission: {submission_id}")
