# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for multipart admin forms.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, File, Form, UploadFile

from core.services.review_service import ImageUpload
from lib.utils import split_list_field


async def get_image_upload(
    image: Annotated[UploadFile | None, File(description="Portfolio screenshot")] = None,
) -> ImageUpload | None:
    """
    Read an optional image part into memory.

    Browsers send an empty part with no filename when the file input is
    left blank; that counts as no image.
    """
    if image is None or not image.filename:
        return None

    content = await image.read()
    return ImageUpload(
        content=content,
        content_type=image.content_type or "",
        filename=image.filename,
    )


def get_image_path(
    image_path: Annotated[
        str | None,
        Form(description="Storage path from a signed upload URL, instead of a file"),
    ] = None,
) -> str | None:
    return image_path.strip() if image_path and image_path.strip() else None


def list_field_or_none(value: str | None) -> list[str] | None:
    """Split a comma-separated form field; None means the field wasn't sent."""
    if value is None:
        return None
    return split_list_field(value)


# Type aliases for dependency injection
ImageDep = Annotated[ImageUpload | None, Depends(get_image_upload)]
ImagePathDep = Annotated[str | None, Depends(get_image_path)]
