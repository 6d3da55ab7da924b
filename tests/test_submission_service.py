# =============================================================================
# tests/test_submission_service.py - Submission Service Tests
# =============================================================================
# Tests run against the in-memory backend from conftest.py.
# =============================================================================

from uuid import uuid4

import pytest

from app.exceptions import SubmissionAlreadyReviewedError, SubmissionNotFoundError
from core.models import SubmissionCreate, SubmissionStatus, SubmissionUpdate
from core.services.submission_service import SubmissionService


class TestCreateSubmission:
    """Test proposing a portfolio."""

    def test_created_pending_for_user(self, backend, user_id):
        data = SubmissionCreate(name="Jane Doe", link="https://janedoe.dev", tags=["Developer"])

        created = SubmissionService.create_submission(user_id, data)

        assert created["status"] == "pending"
        assert created["user_id"] == str(user_id)
        assert created["tags"] == ["Developer"]
        assert created["id"] in backend.submissions

    def test_link_stored_as_string(self, backend, user_id):
        data = SubmissionCreate(name="Jane Doe", link="https://janedoe.dev")
        created = SubmissionService.create_submission(user_id, data)
        assert isinstance(created["link"], str)


class TestListAndGet:
    """Test reading the review queue."""

    def test_filter_by_status(self, backend):
        pending = backend.add_submission()
        backend.add_submission(status="completed")

        result = SubmissionService.list_submissions(status=SubmissionStatus.PENDING)

        assert [s["id"] for s in result] == [pending["id"]]

    def test_list_all_newest_first(self, backend):
        first = backend.add_submission()
        second = backend.add_submission()
        assert [s["id"] for s in SubmissionService.list_submissions()] == [second["id"], first["id"]]

    def test_get_missing(self, backend):
        with pytest.raises(SubmissionNotFoundError) as exc_info:
            SubmissionService.get_submission(uuid4())
        assert exc_info.value.status_code == 404


class TestUpdateSubmission:
    """Test admin edits."""

    def test_partial_update(self, backend):
        submission = backend.add_submission(name="Jane", tags=["Developer"])

        updated = SubmissionService.update_submission(
            submission["id"], SubmissionUpdate(name="Jane Doe")
        )

        assert updated["name"] == "Jane Doe"
        assert updated["tags"] == ["Developer"]

    def test_empty_update_is_noop(self, backend):
        submission = backend.add_submission()
        assert SubmissionService.update_submission(submission["id"], SubmissionUpdate()) == submission

    def test_completed_cannot_be_edited(self, backend):
        submission = backend.add_submission(status="completed", name="Jane Doe")

        with pytest.raises(SubmissionAlreadyReviewedError) as exc_info:
            SubmissionService.update_submission(submission["id"], SubmissionUpdate(name="Someone Else"))

        assert exc_info.value.status_code == 409
        assert backend.submissions[submission["id"]]["name"] == "Jane Doe"
        assert backend.submissions[submission["id"]]["status"] == "completed"


class TestDeleteSubmission:
    """Test rejecting submissions."""

    def test_delete_pending(self, backend):
        submission = backend.add_submission()
        SubmissionService.delete_submission(submission["id"])
        assert submission["id"] not in backend.submissions

    def test_completed_cannot_be_deleted(self, backend):
        submission = backend.add_submission(status="completed")

        with pytest.raises(SubmissionAlreadyReviewedError) as exc_info:
            SubmissionService.delete_submission(submission["id"])

        assert exc_info.value.status_code == 409
        assert submission["id"] in backend.submissions

    def test_delete_missing(self, backend):
        with pytest.raises(SubmissionNotFoundError):
            SubmissionService.delete_submission(uuid4())
