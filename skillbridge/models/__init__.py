from skillbridge.core.database import Base
from .user import User, UserRole
from .tutor_profile import TutorProfile
from .category import Category
from .availability import Availability
from .booking import Booking, BookingStatus
from .review import Review

__all__ = [
    "Base",

    # Accounts
    "User",
    "UserRole",
    "TutorProfile",

    # Catalogue and scheduling
    "Category",
    "Availability",

    # Bookings and reviews
    "Booking",
    "BookingStatus",
    "Review",
]
