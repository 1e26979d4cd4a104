from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from skillbridge.core import constants
from skillbridge.schemas.common import CamelModel
from skillbridge.schemas.availability import AvailabilityResponse
from skillbridge.schemas.review import ReviewResponse


class TutorUserSummary(CamelModel):
    id: uuid.UUID = Field(..., description="User ID")
    name: str = Field(..., description="Tutor name")
    email: Optional[str] = Field(None, description="Tutor email")
    phone: Optional[str] = Field(None, description="Tutor phone")


class TutorProfileResponse(CamelModel):
    id: uuid.UUID = Field(..., description="Tutor profile ID")
    user_id: uuid.UUID = Field(..., description="Owning user ID")
    bio: Optional[str] = Field(None, description="Tutor bio")
    hourly_rate: Optional[float] = Field(None, description="Hourly rate")
    subjects: List[str] = Field(default_factory=list, description="Subjects taught")
    qualifications: Optional[str] = Field(None, description="Qualifications")
    experience: int = Field(0, description="Years of experience")
    rating: float = Field(0, description="Average review rating")
    total_reviews: int = Field(0, description="Number of reviews")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")


class TutorListResponse(TutorProfileResponse):
    user: TutorUserSummary = Field(..., description="Tutor account")


class TutorDetailResponse(TutorListResponse):
    availability: List[AvailabilityResponse] = Field(default_factory=list, description="Weekly availability")
    reviews: List[ReviewResponse] = Field(default_factory=list, description="Student reviews, newest first")


class TutorProfileUpdate(CamelModel):
    bio: Optional[str] = Field(None, max_length=constants.BIO_MAX_LENGTH, description="Tutor bio")
    hourly_rate: Optional[float] = Field(None, ge=constants.HOURLY_RATE_MIN, le=constants.HOURLY_RATE_MAX, strict=True, description="Hourly rate")
    subjects: Optional[List[str]] = Field(None, max_length=constants.SUBJECTS_MAX_COUNT, description="Subjects taught")
    qualifications: Optional[str] = Field(None, max_length=constants.QUALIFICATIONS_MAX_LENGTH, description="Qualifications")
    experience: Optional[int] = Field(None, ge=constants.EXPERIENCE_MIN, le=constants.EXPERIENCE_MAX, strict=True, description="Years of experience")

    @field_validator("subjects")
    @classmethod
    def check_subjects(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        cleaned = [subject.strip() for subject in value]
        if any(not subject for subject in cleaned):
            raise ValueError("Each subject must be a non-empty string")
        return cleaned


class TutorUpdateResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    tutor: TutorProfileResponse = Field(..., description="Updated profile")
