# =============================================================================
# core/models/upload.py - Upload Schemas
# =============================================================================

from pydantic import BaseModel, Field


class UploadUrlResponse(BaseModel):
    """
    A signed URL the browser can upload a screenshot to directly.

    `path` is the storage reference to send back as a portfolio's image.
    """

    upload_url: str = Field(..., description="Signed URL accepting a single upload")
    path: str = Field(..., description="Storage path the object will occupy")
    token: str | None = Field(default=None, description="Upload token, if the backend issues one")
