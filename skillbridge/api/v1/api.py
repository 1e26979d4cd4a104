from fastapi import APIRouter, Depends

from skillbridge.api.v1.endpoints import admin, auth, availability, booking, categories, reviews, tutors
from skillbridge.core.rate_limit import api_rate_limit

api_router = APIRouter(dependencies=[Depends(api_rate_limit)])

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(tutors.router, prefix="/tutors", tags=["tutors"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(booking.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(availability.router, prefix="/availability", tags=["availability"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
