# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login happen client-side against Supabase Auth.
# These routes report on the token the client is holding.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile, including `is_admin`.

    Users that exist in auth but not yet in public.users come back
    with just id and email.
    """
    profile = UserService.get_user(user.id)

    if profile:
        return UserResponse(
            id=user.id,
            email=profile.get("email") or user.email,
            display_name=profile.get("display_name"),
            avatar_url=profile.get("avatar_url"),
            is_admin=profile.get("is_admin") is True,
            created_at=profile.get("created_at"),
        )

    return UserResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """Verify that the current token is valid."""
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
    }
