# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the PortfoliosHub API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_catalog.py: Tag filtering, sorting and form field parsing
# - test_*_service.py: Service tests against an in-memory backend
# - test_api.py: Requests through the FastAPI app
#
# Run tests with: pytest
# =============================================================================
