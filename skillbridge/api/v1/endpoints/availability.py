from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from skillbridge.core.auth import require_role
from skillbridge.core.database import get_db
from skillbridge.models.user import User, UserRole
from skillbridge.schemas.availability import (
    AvailabilityCreateRequest,
    AvailabilityCreateResponse,
    AvailabilityResponse,
)
from skillbridge.schemas.common import MessageResponse
from skillbridge.services.availability_service import AvailabilityService

router = APIRouter()

tutor_only = require_role(UserRole.TUTOR)


@router.get("", response_model=List[AvailabilityResponse])
async def list_availability(
    current_user: User = Depends(tutor_only),
    db: AsyncSession = Depends(get_db),
):
    """Get the caller's weekly availability"""
    return await AvailabilityService(db).list_slots(current_user.id)


@router.post("", response_model=AvailabilityCreateResponse, status_code=status.HTTP_201_CREATED)
async def add_availability(
    request: AvailabilityCreateRequest,
    current_user: User = Depends(tutor_only),
    db: AsyncSession = Depends(get_db),
):
    slot = await AvailabilityService(db).add_slot(current_user.id, request)
    return {"message": "Availability added successfully", "availability": slot}


@router.delete("/{slot_id}", response_model=MessageResponse)
async def delete_availability(
    slot_id: uuid.UUID,
    current_user: User = Depends(tutor_only),
    db: AsyncSession = Depends(get_db),
):
    await AvailabilityService(db).delete_slot(slot_id, current_user.id)
    return {"message": "Availability deleted successfully"}
