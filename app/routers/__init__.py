# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - portfolios.py: Public directory plus admin publishing and editing
# - submissions.py: User submissions and the admin review queue
# - favorites.py: Per-user favorites
# - uploads.py: Signed URLs for direct screenshot uploads
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import portfolios
from . import submissions
from . import favorites
from . import uploads

__all__ = [
    "health",
    "portfolios",
    "submissions",
    "favorites",
    "uploads",
]
