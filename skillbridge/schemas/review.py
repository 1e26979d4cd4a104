from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from skillbridge.core import constants
from skillbridge.schemas.common import CamelModel


class ReviewerSummary(CamelModel):
    id: uuid.UUID = Field(..., description="User ID")
    name: str = Field(..., description="Reviewer name")


def _check_comment(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not value.strip():
        raise ValueError("Comment cannot be empty if provided")
    return value


class ReviewCreateRequest(CamelModel):
    booking_id: uuid.UUID = Field(..., description="Completed booking to review")
    rating: int = Field(..., ge=constants.REVIEW_RATING_MIN, le=constants.REVIEW_RATING_MAX, strict=True, description="Rating 1-5")
    comment: Optional[str] = Field(None, max_length=constants.REVIEW_COMMENT_MAX_LENGTH, description="Optional comment")

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _check_comment(value)


class ReviewUpdateRequest(CamelModel):
    rating: Optional[int] = Field(None, ge=constants.REVIEW_RATING_MIN, le=constants.REVIEW_RATING_MAX, strict=True, description="New rating 1-5")
    comment: Optional[str] = Field(None, max_length=constants.REVIEW_COMMENT_MAX_LENGTH, description="New comment")

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _check_comment(value)


class ReviewResponse(CamelModel):
    id: uuid.UUID = Field(..., description="Review ID")
    booking_id: uuid.UUID = Field(..., description="Reviewed booking")
    tutor_id: uuid.UUID = Field(..., description="Tutor profile ID")
    student_id: uuid.UUID = Field(..., description="Reviewer")
    rating: int = Field(..., description="Rating 1-5")
    comment: Optional[str] = Field(None, description="Comment")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")
    student: Optional[ReviewerSummary] = Field(None, description="Reviewer account")


class ReviewMutationResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    review: ReviewResponse = Field(..., description="Review")
