from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from skillbridge.core.auth import require_role
from skillbridge.core.database import get_db
from skillbridge.core.pagination import PageParams, page_params, paginate
from skillbridge.models.booking import BookingStatus
from skillbridge.models.user import UserRole
from skillbridge.schemas.admin import DashboardResponse
from skillbridge.schemas.booking import BookingResponse
from skillbridge.schemas.common import PaginatedResponse
from skillbridge.schemas.user import UserResponse, UserStatusUpdate, UserUpdateResponse
from skillbridge.services.admin_service import AdminService

# Every route here is admin only
router = APIRouter(dependencies=[Depends(require_role(UserRole.ADMIN))])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(db: AsyncSession = Depends(get_db)):
    """Platform totals and the most recent bookings"""
    return await AdminService(db).dashboard()


@router.get("/users", response_model=PaginatedResponse[UserResponse])
async def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    is_active: Optional[bool] = Query(None, alias="isActive", description="Filter by account state"),
    search: Optional[str] = Query(None, description="Match name or email"),
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    users, total = await AdminService(db).list_users(params, role=role, is_active=is_active, search=search)
    return paginate(users, total, params)


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await AdminService(db).get_user(user_id)


@router.patch("/users/{user_id}", response_model=UserUpdateResponse)
async def update_user_status(
    user_id: uuid.UUID,
    request: UserStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Enable or disable an account"""
    user = await AdminService(db).set_user_active(user_id, request.is_active)
    return {"message": "User status updated successfully", "user": user}


@router.get("/bookings", response_model=PaginatedResponse[BookingResponse])
async def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status", description="Filter by status"),
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    bookings, total = await AdminService(db).list_bookings(params, status=status_filter)
    return paginate(bookings, total, params)
