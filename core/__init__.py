# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the review workflow and directory logic:
# - models/: Pydantic schemas for data validation
# - services/: Submissions, review pipeline, portfolios, favorites, storage
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
