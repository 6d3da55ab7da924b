# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# JWT-based authentication using Supabase Auth, plus admin gating.
# =============================================================================

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "get_current_user",
    "require_admin",
    "AuthUser",
    "UserResponse",
]
