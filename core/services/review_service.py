# =============================================================================
# core/services/review_service.py - Admin Review Pipeline
# =============================================================================
# Publishing and editing portfolios, the two operations that touch both the
# database and object storage:
#
#   approve:  submission(pending) -> upload image -> insert portfolio
#             -> submission(completed)
#   replace:  upload new image -> point portfolio at it -> delete old image
#
# Storage is always written before the reference to it, and old objects are
# deleted only after nothing points at them. A failure can leave an orphaned
# object behind, never a portfolio pointing at a missing one.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from core.models.portfolio import PortfolioCreate, PortfolioUpdate
from core.models.submission import SubmissionStatus
from core.services.portfolio_service import PortfolioService
from core.services.storage_service import StorageService
from core.services.submission_service import SubmissionService
from app.exceptions import (
    ImageNotFoundError,
    ImageRequiredError,
    SubmissionAlreadyReviewedError,
)

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """An image received in a request, not yet stored."""

    content: bytes
    content_type: str
    filename: str | None = None


class ReviewService:
    """Service for admin publishing, approval and editing."""

    @staticmethod
    def _store_image(image: ImageUpload) -> str:
        StorageService.validate_image(image.filename, image.content_type, len(image.content))
        return StorageService.upload_image(image.content, image.content_type, image.filename)

    @staticmethod
    def _resolve_image(
        image: ImageUpload | None,
        image_path: str | None,
    ) -> tuple[str | None, bool]:
        """
        Turn the request's image into a storage path.

        Returns:
            Tuple of (path or None, whether it was uploaded here)

        Raises:
            ImageNotFoundError: If image_path names nothing in storage
        """
        if image is not None:
            return ReviewService._store_image(image), True

        if image_path:
            if not StorageService.image_exists(image_path):
                raise ImageNotFoundError(image_path)
            return image_path, False

        return None, False

    @staticmethod
    def _publish(
        data: PortfolioCreate,
        image: ImageUpload | None,
        image_path: str | None,
    ) -> tuple[dict[str, Any], bool]:
        """
        Store the image (if sent inline) and insert the portfolio row.

        If the insert fails, an image uploaded here is deleted again.

        Returns:
            Tuple of (portfolio, whether its image was uploaded here)
        """
        path, uploaded = ReviewService._resolve_image(image, image_path)
        if path is None:
            raise ImageRequiredError()

        row = {
            "name": data.name,
            "link": str(data.link),
            "tags": data.tags,
            "titles": data.titles,
            "socials": data.socials,
            "image": path,
            "favorites_count": 0,
        }

        try:
            portfolio = SupabaseClient.insert_portfolio(row)
        except Exception:
            if uploaded:
                logger.warning(f"Portfolio insert failed; removing uploaded image {path}")
                StorageService.delete_image(path)
            raise

        logger.info(f"Published portfolio: {portfolio['id']} ({data.name})")
        return portfolio, uploaded

    @staticmethod
    def _unpublish(portfolio: dict[str, Any], uploaded: bool) -> None:
        """Take back a portfolio that was just inserted."""
        try:
            SupabaseClient.delete_portfolio(portfolio["id"])
        except Exception as e:
            logger.error(f"Could not remove portfolio {portfolio['id']} after failed approval: {e}")
            return

        if uploaded:
            StorageService.delete_image(portfolio["image"])

    @staticmethod
    def create_portfolio(
        data: PortfolioCreate,
        image: ImageUpload | None = None,
        image_path: str | None = None,
    ) -> dict[str, Any]:
        """
        Publish a portfolio directly, without a submission.

        Raises:
            ImageRequiredError: If neither an image nor an image_path is given
            ImageNotFoundError: If image_path names nothing in storage
            InvalidImageTypeError / FileTooLargeError: If the image is rejected
            StorageUploadError: If the upload fails
        """
        portfolio, _ = ReviewService._publish(data, image, image_path)
        return portfolio

    @staticmethod
    def approve_submission(
        submission_id: UUID | str,
        data: PortfolioCreate,
        image: ImageUpload | None = None,
        image_path: str | None = None,
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """
        Approve a pending submission and publish it as a portfolio.

        `data` carries the reviewed fields; the admin may have corrected the
        name or link, and those corrections are written back to the submission.

        Returns:
            Tuple of (completed submission, new portfolio)

        Raises:
            SubmissionNotFoundError: If submission doesn't exist
            SubmissionAlreadyReviewedError: If it is already completed
            ImageRequiredError: If no image is supplied
            ImageNotFoundError: If image_path names nothing in storage
        """
        submission = SubmissionService.get_submission(submission_id)

        if submission.get("status") != SubmissionStatus.PENDING.value:
            raise SubmissionAlreadyReviewedError(str(submission_id), submission.get("status"))

        portfolio, uploaded = ReviewService._publish(data, image, image_path)

        try:
            completed = SubmissionService.mark_completed(submission_id, data.name, str(data.link))
        except Exception:
            logger.error(
                f"Submission {submission_id} could not be marked completed; "
                f"withdrawing portfolio {portfolio['id']}"
            )
            ReviewService._unpublish(portfolio, uploaded)
            raise

        return completed, portfolio

    @staticmethod
    def update_portfolio(
        portfolio_id: UUID | str,
        update: PortfolioUpdate,
        image: ImageUpload | None = None,
        image_path: str | None = None,
    ) -> dict[str, Any]:
        """
        Apply admin edits to a portfolio, optionally replacing its image.

        Replacement order: upload the new object, write the new reference,
        then delete the old object. If the upload fails nothing changes. If
        the old object can't be deleted it is logged and left behind.

        Raises:
            PortfolioNotFoundError: If portfolio doesn't exist
        """
        portfolio = PortfolioService.get_portfolio(portfolio_id)
        old_image = portfolio.get("image")

        update_data = update.model_dump(exclude_none=True, mode="json")

        if image is None and image_path == old_image:
            image_path = None  # Already the current image

        new_image, uploaded = ReviewService._resolve_image(image, image_path)

        if new_image:
            update_data["image"] = new_image

        if not update_data:
            return portfolio  # Nothing to update

        try:
            updated = SupabaseClient.update_portfolio(portfolio_id, update_data)
        except Exception:
            if uploaded:
                logger.warning(f"Portfolio update failed; removing uploaded image {new_image}")
                StorageService.delete_image(new_image)
            raise

        logger.info(f"Updated portfolio: {portfolio_id} fields={sorted(update_data)}")

        if new_image and old_image and old_image != new_image:
            if not StorageService.delete_image(old_image):
                logger.warning(f"Old image left orphaned in storage: {old_image}")

        return updated or {**portfolio, **update_data}
