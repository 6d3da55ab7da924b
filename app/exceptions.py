# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where possible, a hint on
# how to fix the request.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PortfoliosHubException(Exception):
    """
    Base exception for the PortfoliosHub API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORTFOLIOSHUB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Submission Exceptions
# =============================================================================

class SubmissionNotFoundError(PortfoliosHubException):
    """Raised when a submission ID doesn't exist."""

    def __init__(self, submission_id: str):
        super().__init__(
            message=f"Submission not found: {submission_id}",
            code="SUBMISSION_NOT_FOUND",
            status_code=404,
            suggestion="Check that the submission_id is correct and it hasn't been deleted",
            details={"submission_id": submission_id}
        )


class SubmissionAlreadyReviewedError(PortfoliosHubException):
    """Raised when changing a submission that is no longer pending."""

    def __init__(self, submission_id: str, status: str):
        super().__init__(
            message=f"Submission has already been reviewed: {submission_id}",
            code="SUBMISSION_ALREADY_REVIEWED",
            status_code=409,
            suggestion="Only pending submissions can be edited, approved or deleted",
            details={"submission_id": submission_id, "status": status}
        )


# =============================================================================
# Portfolio Exceptions
# =============================================================================

class PortfolioNotFoundError(PortfoliosHubException):
    """Raised when a portfolio ID doesn't exist."""

    def __init__(self, portfolio_id: str):
        super().__init__(
            message=f"Portfolio not found: {portfolio_id}",
            code="PORTFOLIO_NOT_FOUND",
            status_code=404,
            suggestion="Check that the portfolio_id is correct",
            details={"portfolio_id": portfolio_id}
        )


# =============================================================================
# Favorite Exceptions
# =============================================================================

class FavoriteNotFoundError(PortfoliosHubException):
    """Raised when a favorite doesn't exist or belongs to another user."""

    def __init__(self, favorite_id: str):
        super().__init__(
            message=f"Favorite not found: {favorite_id}",
            code="FAVORITE_NOT_FOUND",
            status_code=404,
            suggestion="List your favorites with GET /favorites to find valid IDs",
            details={"favorite_id": favorite_id}
        )


class AlreadyFavoritedError(PortfoliosHubException):
    """Raised when a user favorites the same portfolio twice."""

    def __init__(self, portfolio_id: str, favorite_id: str):
        super().__init__(
            message=f"Portfolio is already a favorite: {portfolio_id}",
            code="ALREADY_FAVORITED",
            status_code=409,
            suggestion="Use POST /favorites/toggle or DELETE /favorites/{id} to unfavorite",
            details={"portfolio_id": portfolio_id, "favorite_id": favorite_id}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AdminRequiredError(PortfoliosHubException):
    """Raised when a non-admin user calls a review endpoint."""

    def __init__(self, user_id: str):
        super().__init__(
            message="Sorry, you can not access this resource. You need to be an admin.",
            code="ADMIN_REQUIRED",
            status_code=403,
            suggestion="Ask an existing admin to set is_admin on your user record",
            details={"user_id": user_id}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidImageTypeError(PortfoliosHubException):
    """Raised when an uploaded file is not an allowed image type."""

    def __init__(self, filename: str, content_type: str | None, allowed: list[str]):
        super().__init__(
            message=f"Invalid image type: {filename}",
            code="INVALID_IMAGE_TYPE",
            status_code=400,
            suggestion=f"Only these image types are supported: {', '.join(allowed)}",
            details={"filename": filename, "content_type": content_type, "allowed_types": allowed}
        )


class ImageRequiredError(PortfoliosHubException):
    """Raised when a portfolio is created without an image."""

    def __init__(self):
        super().__init__(
            message="An image is required to publish a portfolio",
            code="IMAGE_REQUIRED",
            status_code=400,
            suggestion="Attach a screenshot in the 'image' form field",
        )


class ImageNotFoundError(PortfoliosHubException):
    """Raised when an image_path doesn't name an uploaded object."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Image not found in storage: {path}",
            code="IMAGE_NOT_FOUND",
            status_code=400,
            suggestion="Upload the file to the signed URL from POST /uploads/url before referencing its path",
            details={"image_path": path}
        )


class FileTooLargeError(PortfoliosHubException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(PortfoliosHubException):
    """Raised when file upload to storage fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def portfolioshub_exception_handler(
    request: Request,
    exc: PortfoliosHubException
) -> JSONResponse:
    """
    Convert PortfoliosHubException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors raised while building models in handlers.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
