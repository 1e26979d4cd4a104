from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from skillbridge.core.auth import get_current_user, require_role
from skillbridge.core.database import get_db
from skillbridge.core.pagination import PageParams, page_params, paginate
from skillbridge.models.booking import BookingStatus
from skillbridge.models.user import User, UserRole
from skillbridge.schemas.booking import (
    BookingCreateRequest,
    BookingMutationResponse,
    BookingResponse,
    BookingStatusUpdateRequest,
)
from skillbridge.schemas.common import PaginatedResponse
from skillbridge.services.booking_service import BookingService

router = APIRouter()


@router.post("", response_model=BookingMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: BookingCreateRequest,
    current_user: User = Depends(require_role(UserRole.STUDENT)),
    db: AsyncSession = Depends(get_db),
):
    """Book a session with a tutor; the booking starts CONFIRMED"""
    booking = await BookingService(db).create_booking(current_user.id, request)
    return {"message": "Booking created successfully", "booking": booking}


@router.get("", response_model=PaginatedResponse[BookingResponse])
async def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status", description="Filter by status"),
    params: PageParams = Depends(page_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's bookings (all bookings for admins)"""
    bookings, total = await BookingService(db).list_bookings(current_user, params, status=status_filter)
    return paginate(bookings, total, params)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await BookingService(db).get_booking(booking_id, current_user)


@router.patch("/{booking_id}", response_model=BookingMutationResponse)
async def update_booking_status(
    booking_id: uuid.UUID,
    request: BookingStatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move a booking to a new status, subject to the caller's role"""
    booking = await BookingService(db).transition(
        booking_id, current_user.role, current_user.id, request.status
    )
    return {"message": "Booking status updated successfully", "booking": booking}


@router.delete("/{booking_id}", response_model=BookingMutationResponse)
async def cancel_booking(
    booking_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a booking; the row is kept with status CANCELLED"""
    booking = await BookingService(db).cancel(booking_id, current_user.role, current_user.id)
    return {"message": "Booking cancelled successfully", "booking": booking}
