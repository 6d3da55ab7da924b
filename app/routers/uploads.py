# =============================================================================
# app/routers/uploads.py - Direct Upload Endpoints
# =============================================================================
# Issues signed URLs so an admin's browser can put a screenshot straight
# into storage, then reference it by path when publishing.
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.auth import AuthUser, require_admin
from core.models.upload import UploadUrlResponse
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()


class UploadUrlRequest(BaseModel):
    """What the client is about to upload."""
    filename: str | None = Field(default=None, examples=["screenshot.png"])
    content_type: str = Field(..., examples=["image/png"])
    size: int = Field(default=0, ge=0, description="File size in bytes, if known")


@router.post("/url", response_model=UploadUrlResponse)
async def create_upload_url(
    request: UploadUrlRequest,
    admin: AuthUser = Depends(require_admin),
):
    """
    Get a signed URL for a screenshot upload.

    The type and size are checked up front with the same rules as a
    direct multipart upload. Send the returned `path` as `image_path`.
    """
    StorageService.validate_image(request.filename, request.content_type, request.size)
    signed = StorageService.create_upload_url(request.filename, request.content_type)
    return UploadUrlResponse(**signed)
