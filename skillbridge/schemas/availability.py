from pydantic import Field, model_validator
from datetime import datetime
import uuid

from skillbridge.core import constants
from skillbridge.schemas.common import CamelModel


def minutes_of_day(value: str) -> int:
    """Convert an HH:MM string to minutes since midnight"""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class AvailabilityCreateRequest(CamelModel):
    day_of_week: int = Field(..., ge=constants.DAY_OF_WEEK_MIN, le=constants.DAY_OF_WEEK_MAX, strict=True, description="0 = Sunday ... 6 = Saturday")
    start_time: str = Field(..., pattern=constants.TIME_PATTERN, description="Start time, HH:MM (24h)")
    end_time: str = Field(..., pattern=constants.TIME_PATTERN, description="End time, HH:MM (24h)")

    @model_validator(mode="after")
    def check_window(self) -> "AvailabilityCreateRequest":
        start = minutes_of_day(self.start_time)
        end = minutes_of_day(self.end_time)
        if start >= end:
            raise ValueError("startTime must be before endTime")
        if end - start < constants.MIN_SLOT_MINUTES:
            raise ValueError(f"Availability slot must be at least {constants.MIN_SLOT_MINUTES} minutes")
        return self


class AvailabilityResponse(CamelModel):
    id: uuid.UUID = Field(..., description="Slot ID")
    tutor_id: uuid.UUID = Field(..., description="Tutor profile ID")
    day_of_week: int = Field(..., description="0 = Sunday ... 6 = Saturday")
    start_time: str = Field(..., description="Start time, HH:MM")
    end_time: str = Field(..., description="End time, HH:MM")
    created_at: datetime = Field(..., description="Creation time")


class AvailabilityCreateResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    availability: AvailabilityResponse = Field(..., description="Created slot")
