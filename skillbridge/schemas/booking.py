from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from skillbridge.core import constants
from skillbridge.models.booking import BookingStatus
from skillbridge.schemas.common import CamelModel
from skillbridge.schemas.category import CategoryResponse
from skillbridge.schemas.user import UserSummary


class BookingCreateRequest(CamelModel):
    tutor_id: uuid.UUID = Field(..., description="Tutor profile ID")
    category_id: uuid.UUID = Field(..., description="Category ID")
    subject: str = Field(..., max_length=constants.BOOKING_SUBJECT_MAX_LENGTH, description="Subject for the session")
    session_date: datetime = Field(..., description="Session start, must be in the future")
    duration: int = Field(..., ge=constants.BOOKING_DURATION_MIN, le=constants.BOOKING_DURATION_MAX, strict=True, description="Duration in minutes")
    price: float = Field(..., gt=0, le=constants.BOOKING_PRICE_MAX, strict=True, description="Agreed price")
    notes: Optional[str] = Field(None, max_length=constants.BOOKING_NOTES_MAX_LENGTH, description="Additional notes")
    payment_method: Optional[str] = Field(None, max_length=constants.PAYMENT_METHOD_MAX_LENGTH, description="Payment method label, stored only")

    @field_validator("subject")
    @classmethod
    def subject_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Subject cannot be empty")
        return value

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return value if value.strip() else None


class BookingStatusUpdateRequest(CamelModel):
    status: BookingStatus = Field(..., description="CONFIRMED, COMPLETED or CANCELLED")


class BookingTutorSummary(CamelModel):
    id: uuid.UUID = Field(..., description="Tutor profile ID")
    user: Optional[UserSummary] = Field(None, description="Tutor account")


class BookingReviewSummary(CamelModel):
    id: uuid.UUID = Field(..., description="Review ID")
    rating: int = Field(..., description="Rating 1-5")
    comment: Optional[str] = Field(None, description="Review comment")


class BookingResponse(CamelModel):
    id: uuid.UUID = Field(..., description="Booking ID")
    student_id: uuid.UUID = Field(..., description="Student user ID")
    tutor_id: uuid.UUID = Field(..., description="Tutor profile ID")
    category_id: uuid.UUID = Field(..., description="Category ID")
    subject: str = Field(..., description="Subject")
    session_date: datetime = Field(..., description="Session start")
    duration: int = Field(..., description="Duration in minutes")
    price: float = Field(..., description="Agreed price")
    status: BookingStatus = Field(..., description="Booking status")
    notes: Optional[str] = Field(None, description="Additional notes")
    payment_method: Optional[str] = Field(None, description="Payment method label")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")
    student: Optional[UserSummary] = Field(None, description="Student account")
    tutor: Optional[BookingTutorSummary] = Field(None, description="Tutor")
    category: Optional[CategoryResponse] = Field(None, description="Category")
    review: Optional[BookingReviewSummary] = Field(None, description="Review left for this booking")


class BookingMutationResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    booking: BookingResponse = Field(..., description="Booking")
