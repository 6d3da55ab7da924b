# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase tables and the images bucket,
#   patched in wherever the services talk to the backend
# - Signed JWTs for exercising the real auth dependencies
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import time
from contextlib import ExitStack
from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from uuid import uuid4

import pytest
from jose import jwt


JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]

# Every module that imports SupabaseClient by name
BACKEND_MODULES = [
    "core.services.portfolio_service",
    "core.services.submission_service",
    "core.services.favorite_service",
    "core.services.review_service",
    "core.services.user_service",
]


# =============================================================================
# In-memory backend
# =============================================================================

class FakeBackend:
    """
    Mimics the SupabaseClient class methods the services call.

    Rows are plain dicts keyed by id; inserts fill in id and created_at the
    way the database defaults would.
    """

    def __init__(self):
        self.portfolios: dict[str, dict] = {}
        self.submissions: dict[str, dict] = {}
        self.favorites: dict[str, dict] = {}
        self.users: dict[str, dict] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.fail_next_portfolio_insert = False
        self.fail_next_portfolio_update = False
        self.fail_next_submission_update = False

    def _stamp(self, data: dict) -> dict:
        self._clock += timedelta(minutes=1)
        row = {"id": str(uuid4()), "created_at": self._clock.isoformat(), **data}
        return row

    # --- seeding helpers ---------------------------------------------------

    def add_portfolio(self, **fields) -> dict:
        row = self._stamp({
            "name": "Jane Doe",
            "link": "https://janedoe.dev",
            "tags": [],
            "titles": [],
            "socials": [],
            "image": None,
            "favorites_count": 0,
            **fields,
        })
        self.portfolios[row["id"]] = row
        return row

    def add_submission(self, **fields) -> dict:
        row = self._stamp({
            "user_id": str(uuid4()),
            "name": "Jane Doe",
            "link": "https://janedoe.dev",
            "tags": ["Developer"],
            "status": "pending",
            **fields,
        })
        self.submissions[row["id"]] = row
        return row

    def add_user(self, user_id, is_admin: bool = False, **fields) -> dict:
        row = {"id": str(user_id), "email": "user@example.com", "is_admin": is_admin, **fields}
        self.users[str(user_id)] = row
        return row

    # --- portfolios --------------------------------------------------------

    def fetch_portfolios(self):
        return sorted(self.portfolios.values(), key=lambda p: p["created_at"], reverse=True)

    def fetch_portfolio(self, portfolio_id):
        return self.portfolios.get(str(portfolio_id))

    def insert_portfolio(self, data):
        if self.fail_next_portfolio_insert:
            self.fail_next_portfolio_insert = False
            raise RuntimeError("insert failed")
        row = self._stamp(data)
        self.portfolios[row["id"]] = row
        return row

    def update_portfolio(self, portfolio_id, data):
        if self.fail_next_portfolio_update:
            self.fail_next_portfolio_update = False
            raise RuntimeError("update failed")
        row = self.portfolios.get(str(portfolio_id))
        if row is None:
            return None
        row.update(data)
        return dict(row)

    def delete_portfolio(self, portfolio_id):
        return self.portfolios.pop(str(portfolio_id), None) is not None

    # --- submissions -------------------------------------------------------

    def fetch_submissions(self, status=None):
        rows = sorted(self.submissions.values(), key=lambda s: s["created_at"], reverse=True)
        if status is not None:
            status = getattr(status, "value", status)
            rows = [s for s in rows if s["status"] == status]
        return rows

    def fetch_submission(self, submission_id):
        return self.submissions.get(str(submission_id))

    def insert_submission(self, data):
        row = self._stamp(data)
        self.submissions[row["id"]] = row
        return row

    def update_submission(self, submission_id, data):
        if self.fail_next_submission_update:
            self.fail_next_submission_update = False
            raise RuntimeError("update failed")
        row = self.submissions.get(str(submission_id))
        if row is None:
            return None
        row.update(data)
        return dict(row)

    def delete_submission(self, submission_id):
        return self.submissions.pop(str(submission_id), None) is not None

    # --- favorites ---------------------------------------------------------

    def fetch_favorites_for_user(self, user_id):
        rows = [f for f in self.favorites.values() if f["user_id"] == str(user_id)]
        return sorted(rows, key=lambda f: f["created_at"], reverse=True)

    def fetch_favorite(self, favorite_id):
        return self.favorites.get(str(favorite_id))

    def fetch_user_favorite_for_portfolio(self, user_id, portfolio_id):
        for row in self.favorites.values():
            if row["user_id"] == str(user_id) and row["portfolio_id"] == str(portfolio_id):
                return row
        return None

    def count_favorites_for_portfolio(self, portfolio_id):
        return sum(1 for f in self.favorites.values() if f["portfolio_id"] == str(portfolio_id))

    def insert_favorite(self, data):
        row = self._stamp(data)
        self.favorites[row["id"]] = row
        return row

    def delete_favorite(self, favorite_id):
        return self.favorites.pop(str(favorite_id), None) is not None

    # --- users -------------------------------------------------------------

    def fetch_user(self, user_id):
        return self.users.get(str(user_id))


class FakeBucket:
    """Mimics the storage bucket API used by StorageService."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_upload = False
        self.fail_remove = False

    def upload(self, path, file, file_options=None):
        self.calls.append(("upload", path))
        if self.fail_upload:
            raise RuntimeError("upload refused")
        self.objects[path] = file
        return {"Key": path}

    def remove(self, paths):
        for path in paths:
            self.calls.append(("remove", path))
        if self.fail_remove:
            raise RuntimeError("remove refused")
        for path in paths:
            self.objects.pop(path, None)
        return [{"name": p} for p in paths]

    def list(self, path, options=None):
        search = (options or {}).get("search", "")
        names = [p.rpartition("/")[2] for p in self.objects if p.rpartition("/")[0] == path]
        return [{"name": n} for n in names if search in n]

    def get_public_url(self, path):
        return f"https://test-project.supabase.co/storage/v1/object/public/portfolio-images/{path}"

    def create_signed_upload_url(self, path):
        return {
            "signed_url": f"https://test-project.supabase.co/storage/v1/object/upload/sign/{path}?token=abc",
            "token": "abc",
            "path": path,
        }


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def backend():
    """In-memory tables patched in place of SupabaseClient in every service."""
    fake = FakeBackend()
    with ExitStack() as stack:
        for module in BACKEND_MODULES:
            stack.enter_context(patch(f"{module}.SupabaseClient", fake))
        yield fake


@pytest.fixture
def bucket():
    """In-memory images bucket patched in place of the real one."""
    from core.services.storage_service import StorageService

    fake = FakeBucket()
    with patch.object(StorageService, "_bucket", staticmethod(lambda: fake)):
        yield fake


@pytest.fixture
def png_image():
    """A small PNG upload as received from a request."""
    from core.services.review_service import ImageUpload

    return ImageUpload(content=b"\x89PNG\r\n\x1a\nfake", content_type="image/png", filename="shot.png")


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def make_token():
    """Build a Supabase-style HS256 access token."""

    def _make(sub, email="user@example.com", expires_in=3600, audience="authenticated"):
        now = int(time.time())
        claims = {
            "sub": str(sub),
            "email": email,
            "aud": audience,
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        }
        return jwt.encode(claims, JWT_SECRET, algorithm="HS256")

    return _make
