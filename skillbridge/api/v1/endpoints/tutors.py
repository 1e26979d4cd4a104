from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from skillbridge.core.auth import require_role
from skillbridge.core.database import get_db
from skillbridge.core.pagination import PageParams, page_params, paginate
from skillbridge.models.user import User, UserRole
from skillbridge.schemas.booking import BookingResponse
from skillbridge.schemas.common import PaginatedResponse
from skillbridge.schemas.tutor import (
    TutorDetailResponse,
    TutorListResponse,
    TutorProfileUpdate,
    TutorUpdateResponse,
)
from skillbridge.services.tutor_service import TutorService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[TutorListResponse])
async def list_tutors(
    subject: Optional[str] = Query(None, description="Filter by subject"),
    min_rating: Optional[float] = Query(None, alias="minRating", description="Minimum rating"),
    max_price: Optional[float] = Query(None, alias="maxPrice", description="Maximum hourly rate"),
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    """List/search tutors with filters"""
    tutors, total = await TutorService(db).list_tutors(
        params, subject=subject, min_rating=min_rating, max_price=max_price
    )
    return paginate(tutors, total, params)


@router.put("", response_model=TutorUpdateResponse)
async def update_profile(
    request: TutorProfileUpdate,
    current_user: User = Depends(require_role(UserRole.TUTOR)),
    db: AsyncSession = Depends(get_db),
):
    """Update the caller's own tutor profile"""
    profile = await TutorService(db).update_profile(current_user.id, request)
    return {"message": "Tutor profile updated successfully", "tutor": profile}


@router.get("/me/bookings", response_model=List[BookingResponse])
async def my_bookings(
    current_user: User = Depends(require_role(UserRole.TUTOR)),
    db: AsyncSession = Depends(get_db),
):
    return await TutorService(db).my_bookings(current_user.id)


@router.get("/{tutor_id}", response_model=TutorDetailResponse)
async def get_tutor(tutor_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Get tutor details with availability and reviews"""
    return await TutorService(db).get_tutor(tutor_id)
