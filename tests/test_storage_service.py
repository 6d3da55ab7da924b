# =============================================================================
# tests/test_storage_service.py - Storage and Backend Wrapper Tests
# =============================================================================
# This module contains tests for:
# - Image validation, upload, deletion and URLs against a fake bucket
# - SupabaseClient error mapping with a mocked supabase client
# =============================================================================

from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest

from app.exceptions import FileTooLargeError, InvalidImageTypeError, StorageUploadError
from core.services.storage_service import IMAGE_PREFIX, StorageService
from lib.supabase_client import SupabaseClient, SupabaseClientError


# =============================================================================
# StorageService Tests
# =============================================================================

class TestValidateImage:
    """Test upload checks."""

    @pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "image/webp", "IMAGE/PNG"])
    def test_allowed_types(self, content_type):
        StorageService.validate_image("shot", content_type, 1024)

    @pytest.mark.parametrize("content_type", [None, "", "text/html", "image/svg+xml"])
    def test_rejected_types(self, content_type):
        with pytest.raises(InvalidImageTypeError) as exc_info:
            StorageService.validate_image("shot", content_type, 1024)
        assert exc_info.value.status_code == 400

    def test_size_limit(self):
        with pytest.raises(FileTooLargeError) as exc_info:
            StorageService.validate_image("shot.png", "image/png", 50 * 1024 * 1024)
        assert exc_info.value.status_code == 413


class TestBuildImagePath:
    """Test storage path generation."""

    def test_unique_paths(self):
        assert StorageService.build_image_path("a.png") != StorageService.build_image_path("a.png")

    def test_extension_from_filename(self):
        path = StorageService.build_image_path("Shot.JPG")
        assert path.startswith(f"{IMAGE_PREFIX}/")
        assert path.endswith(".jpg")

    def test_extension_from_content_type(self):
        assert StorageService.build_image_path(None, "image/png").endswith(".png")


class TestBucketOperations:
    """Test upload, delete and URLs."""

    def test_upload_returns_path(self, bucket):
        path = StorageService.upload_image(b"data", "image/png", "shot.png")
        assert bucket.objects[path] == b"data"

    def test_upload_failure_raises(self, bucket):
        bucket.fail_upload = True
        with pytest.raises(StorageUploadError):
            StorageService.upload_image(b"data", "image/png", "shot.png")

    def test_delete_reports_success(self, bucket):
        bucket.objects["images/a.png"] = b"data"
        assert StorageService.delete_image("images/a.png") is True
        assert bucket.objects == {}

    def test_delete_failure_returns_false(self, bucket):
        bucket.fail_remove = True
        assert StorageService.delete_image("images/a.png") is False

    def test_public_url_for_empty_path(self, bucket):
        assert StorageService.get_public_url(None) is None
        assert StorageService.get_public_url("") is None

    def test_signed_upload_url(self, bucket):
        signed = StorageService.create_upload_url("shot.webp", "image/webp")
        assert signed["path"].endswith(".webp")
        assert signed["path"] in signed["upload_url"]
        assert signed["token"] == "abc"


class TestImageExists:
    """Test lookups of client-supplied image paths."""

    def test_uploaded_image_found(self, bucket):
        bucket.objects["images/direct.png"] = b"data"
        assert StorageService.image_exists("images/direct.png") is True

    def test_reserved_but_empty_path_missing(self, bucket):
        signed = StorageService.create_upload_url("shot.png", "image/png")
        assert StorageService.image_exists(signed["path"]) is False

    def test_name_must_match_exactly(self, bucket):
        bucket.objects["images/direct.png.bak"] = b"data"
        assert StorageService.image_exists("images/direct.png") is False

    @pytest.mark.parametrize("path", [
        None,
        "",
        "direct.png",
        "images/",
        "other/direct.png",
        "images/../direct.png",
        "images/nested/direct.png",
    ])
    def test_paths_outside_images_prefix(self, bucket, path):
        bucket.objects["other/direct.png"] = b"data"
        bucket.objects["images/nested/direct.png"] = b"data"
        assert StorageService.image_exists(path) is False

    def test_lookup_failure_raises(self, bucket):
        def broken(path, options=None):
            raise RuntimeError("bucket unavailable")

        bucket.list = broken

        with pytest.raises(SupabaseClientError) as exc_info:
            StorageService.image_exists("images/direct.png")

        assert exc_info.value.code == "STORAGE_LOOKUP_FAILED"


# =============================================================================
# SupabaseClient Tests
# =============================================================================

class TestSupabaseClient:
    """Test error mapping with a mocked supabase client."""

    @pytest.fixture
    def client(self):
        mock_client = MagicMock()
        with patch.object(SupabaseClient, "get_client", return_value=mock_client):
            yield mock_client

    def test_no_rows_reads_as_none(self, client):
        chain = client.table.return_value.select.return_value.eq.return_value.single.return_value
        chain.execute.side_effect = Exception("{'code': 'PGRST116', 'message': 'no rows'}")

        assert SupabaseClient.fetch_portfolio("abc") is None
        client.table.assert_called_with("portfolios")

    def test_other_errors_wrapped(self, client):
        chain = client.table.return_value.select.return_value.eq.return_value.single.return_value
        chain.execute.side_effect = Exception("connection reset")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_submission("abc")

        assert exc_info.value.code == "FETCH_SUBMISSION_FAILED"

    def test_insert_without_data_raises(self, client):
        client.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(SupabaseClientError):
            SupabaseClient.insert_favorite({"user_id": "u", "portfolio_id": "p"})

    def test_delete_portfolio(self, client):
        portfolio_id = uuid4()
        chain = client.table.return_value.delete.return_value.eq.return_value
        chain.execute.return_value = MagicMock(data=[{"id": str(portfolio_id)}])

        assert SupabaseClient.delete_portfolio(portfolio_id) is True
        client.table.assert_called_with("portfolios")
        client.table.return_value.delete.return_value.eq.assert_called_with("id", str(portfolio_id))

    def test_count_uses_exact_count(self, client):
        chain = client.table.return_value.select.return_value.eq.return_value
        chain.execute.return_value = MagicMock(count=4)

        assert SupabaseClient.count_favorites_for_portfolio("p") == 4
        client.table.return_value.select.assert_called_with("id", count="exact")
