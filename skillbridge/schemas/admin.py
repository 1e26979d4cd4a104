from pydantic import Field
from typing import Dict, List

from skillbridge.schemas.common import CamelModel
from skillbridge.schemas.booking import BookingResponse


class DashboardStatistics(CamelModel):
    total_users: int = Field(..., description="Registered users")
    total_tutors: int = Field(..., description="Tutor profiles")
    total_bookings: int = Field(..., description="Bookings of any status")
    total_reviews: int = Field(..., description="Reviews written")
    bookings_by_status: Dict[str, int] = Field(..., description="Booking count per status")


class DashboardResponse(CamelModel):
    statistics: DashboardStatistics = Field(..., description="Platform totals")
    recent_bookings: List[BookingResponse] = Field(..., description="Five most recently created bookings")
