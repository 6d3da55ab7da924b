# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - submission.py: User submissions and their review status
# - portfolio.py: Published portfolios and listings
# - favorite.py: User favorites
# - upload.py: Signed upload URLs
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Submission Models - Review workflow
# -----------------------------------------------------------------------------
from .submission import (
    SubmissionCreate,
    SubmissionList,
    SubmissionResponse,
    SubmissionStatus,
    SubmissionUpdate,
)

# -----------------------------------------------------------------------------
# Portfolio Models - Published directory
# -----------------------------------------------------------------------------
from .portfolio import (
    ApprovalResponse,
    PortfolioCreate,
    PortfolioList,
    PortfolioResponse,
    PortfolioUpdate,
)

# -----------------------------------------------------------------------------
# Favorite Models - User bookmarks
# -----------------------------------------------------------------------------
from .favorite import (
    FavoriteCreate,
    FavoriteList,
    FavoriteResponse,
    FavoriteToggleResponse,
)

from .upload import UploadUrlResponse

__all__ = [
    # Submission
    "SubmissionCreate",
    "SubmissionList",
    "SubmissionResponse",
    "SubmissionStatus",
    "SubmissionUpdate",
    # Portfolio
    "ApprovalResponse",
    "PortfolioCreate",
    "PortfolioList",
    "PortfolioResponse",
    "PortfolioUpdate",
    # Favorite
    "FavoriteCreate",
    "FavoriteList",
    "FavoriteResponse",
    "FavoriteToggleResponse",
    # Upload
    "UploadUrlResponse",
]
