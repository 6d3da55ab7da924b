# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .favorite_service import FavoriteService
from .portfolio_service import PortfolioService
from .review_service import ImageUpload, ReviewService
from .storage_service import StorageService
from .submission_service import SubmissionService
from .user_service import UserService

__all__ = [
    "FavoriteService",
    "ImageUpload",
    "PortfolioService",
    "ReviewService",
    "StorageService",
    "SubmissionService",
    "UserService",
]
