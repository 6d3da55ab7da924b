# =============================================================================
# core/models/submission.py - Submission Schemas
# =============================================================================
# These models define the API contract for user submissions:
# - SubmissionCreate: Input when a user proposes a portfolio
# - SubmissionUpdate: Admin edits while reviewing
# - SubmissionResponse: Output when returning submission data to clients
# - SubmissionStatus: Enum for review states
#
# Flow: pending -> completed (approved, portfolio created)
#       pending -> deleted (rejected by an admin)
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class SubmissionStatus(str, Enum):
    """
    Review states for a submission.

    - pending: waiting for an admin
    - completed: approved and published as a portfolio
    """
    PENDING = "pending"
    COMPLETED = "completed"


def clean_tags(value: list[str] | None) -> list[str] | None:
    """Trim tags and drop blank ones."""
    if value is None:
        return None
    return [tag.strip() for tag in value if tag and tag.strip()]


class SubmissionCreate(BaseModel):
    """
    Schema for proposing a portfolio.

    Example:
        {
            "name": "Jane Doe",
            "link": "https://janedoe.dev",
            "tags": ["Developer"]
        }
    """

    name: str = Field(
        ...,
        min_length=2,
        max_length=50,
        description="Display name of the portfolio owner"
    )

    link: HttpUrl = Field(
        ...,
        description="Public URL of the portfolio"
    )

    tags: list[str] = Field(
        default_factory=list,
        description="Categories such as Developer or Designer"
    )

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value):
        return clean_tags(value)


class SubmissionUpdate(BaseModel):
    """
    Admin edits to a pending submission. Only provided fields are changed.

    Status is not editable here; approval is the only way to complete a
    submission.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=2, max_length=50)
    link: HttpUrl | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, value):
        return clean_tags(value)


class SubmissionResponse(BaseModel):
    """Schema for returning submission data to clients."""

    id: UUID = Field(..., description="Unique submission identifier")
    created_at: datetime | None = Field(default=None, description="When the submission was made")
    user_id: UUID | None = Field(default=None, description="User who submitted it")
    name: str
    link: str
    tags: list[str] = Field(default_factory=list)
    status: SubmissionStatus

    @field_validator("tags", mode="before")
    @classmethod
    def tags_default(cls, value):
        return value or []


class SubmissionList(BaseModel):
    """Response for listing submissions."""

    submissions: list[SubmissionResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)
