# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles portfolio screenshot uploads, deletions and URLs in Supabase Storage.
# A stored image is referenced by exactly one portfolio through its path.
# =============================================================================

import logging
import mimetypes
from pathlib import PurePosixPath
from uuid import uuid4

from lib.supabase_client import SupabaseClient, SupabaseClientError
from app.config import settings
from app.exceptions import FileTooLargeError, InvalidImageTypeError, StorageUploadError

logger = logging.getLogger(__name__)

# Prefix for every object path inside the images bucket
IMAGE_PREFIX = "images"


class StorageService:
    """
    Service for Supabase Storage operations.

    Uploads never overwrite: each image gets a fresh path, so replacing a
    portfolio's screenshot always leaves the previous object in place until
    it is explicitly deleted.
    """

    @staticmethod
    def _bucket():
        client = SupabaseClient.get_client()
        return client.storage.from_(settings.IMAGES_BUCKET)

    @staticmethod
    def build_image_path(filename: str | None = None, content_type: str | None = None) -> str:
        """
        Build a unique storage path for a new image.

        The extension comes from the filename, falling back to the MIME type.

        Example:
            build_image_path("shot.PNG") -> "images/3f2a...c1.png"
        """
        ext = PurePosixPath(filename or "").suffix.lower()
        if not ext and content_type:
            ext = mimetypes.guess_extension(content_type) or ""
        return f"{IMAGE_PREFIX}/{uuid4().hex}{ext}"

    @staticmethod
    def validate_image(filename: str | None, content_type: str | None, size: int) -> None:
        """
        Check an uploaded file against the allowed types and size limit.

        Raises:
            InvalidImageTypeError: If the MIME type isn't allowed
            FileTooLargeError: If the file exceeds MAX_UPLOAD_SIZE_MB
        """
        allowed = settings.allowed_image_types_list
        if not content_type or content_type.lower() not in allowed:
            raise InvalidImageTypeError(filename or "unnamed", content_type, allowed)

        if size > settings.max_upload_size_bytes:
            raise FileTooLargeError(size / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    @staticmethod
    def upload_image(
        content: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> str:
        """
        Upload an image and return its storage path.

        Args:
            content: Raw image bytes
            content_type: MIME type sent with the object
            filename: Original filename (used only for the extension)

        Returns:
            Storage path where the image was uploaded

        Raises:
            StorageUploadError: If upload fails
        """
        path = StorageService.build_image_path(filename, content_type)

        try:
            StorageService._bucket().upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"}
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Uploaded image to storage: {path}")
        return path

    @staticmethod
    def delete_image(storage_path: str) -> bool:
        """
        Delete an image from storage.

        Failures are logged and reported through the return value; a
        leftover object is harmless, a missing one is not.

        Returns:
            True if deleted successfully
        """
        try:
            StorageService._bucket().remove([storage_path])
            logger.info(f"Deleted image from storage: {storage_path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete image {storage_path}: {e}")
            return False

    @staticmethod
    def image_exists(storage_path: str | None) -> bool:
        """
        Check that a client-supplied path names an uploaded image.

        Only flat paths under the images prefix qualify. Signed upload URLs
        reserve a path before anything is stored there, so the object itself
        is looked up.

        Raises:
            SupabaseClientError: If the bucket can't be listed
        """
        if not storage_path:
            return False

        folder, _, name = storage_path.rpartition("/")
        if folder != IMAGE_PREFIX or not name or name in (".", ".."):
            return False

        try:
            entries = StorageService._bucket().list(folder, {"search": name})
        except Exception as e:
            logger.error(f"Failed to look up image {storage_path}: {e}")
            raise SupabaseClientError(
                message=f"Failed to look up image in storage: {e}",
                code="STORAGE_LOOKUP_FAILED",
                details={"image_path": storage_path}
            )

        return any(entry.get("name") == name for entry in entries or [])

    @staticmethod
    def get_public_url(storage_path: str | None) -> str | None:
        """
        Get a public URL for a stored image.

        Returns None for portfolios without an image.
        """
        if not storage_path:
            return None
        try:
            return StorageService._bucket().get_public_url(storage_path)
        except Exception as e:
            logger.error(f"Failed to get public URL for {storage_path}: {e}")
            raise

    @staticmethod
    def create_upload_url(
        filename: str | None = None,
        content_type: str | None = None,
    ) -> dict:
        """
        Reserve a path and return a signed URL the client can upload to.

        Returns:
            Dict with upload_url, path and token

        Raises:
            StorageUploadError: If the backend refuses to sign the URL
        """
        path = StorageService.build_image_path(filename, content_type)

        try:
            signed = StorageService._bucket().create_signed_upload_url(path)
        except Exception as e:
            logger.error(f"Failed to create signed upload URL: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Issued signed upload URL for {path}")
        return {
            "upload_url": signed.get("signed_url") or signed.get("signedUrl"),
            "path": path,
            "token": signed.get("token"),
        }
