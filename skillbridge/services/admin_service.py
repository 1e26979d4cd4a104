import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.core.exceptions import DatabaseError, NotFoundError
from skillbridge.core.pagination import PageParams
from skillbridge.models.booking import Booking, BookingStatus
from skillbridge.models.review import Review
from skillbridge.models.tutor_profile import TutorProfile
from skillbridge.models.user import User, UserRole
from skillbridge.services.booking_service import booking_detail_query

logger = logging.getLogger(__name__)

RECENT_BOOKINGS = 5


class AdminService:
    """Read-mostly platform views for administrators"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def dashboard(self) -> Dict[str, Any]:
        total_users = await self.db.scalar(select(func.count(User.id)))
        total_tutors = await self.db.scalar(select(func.count(TutorProfile.id)))
        total_bookings = await self.db.scalar(select(func.count(Booking.id)))
        total_reviews = await self.db.scalar(select(func.count(Review.id)))

        by_status = {status.value: 0 for status in BookingStatus}
        result = await self.db.execute(
            select(Booking.status, func.count(Booking.id)).group_by(Booking.status)
        )
        for status, count in result.all():
            by_status[status.value] = count

        recent = await self.db.execute(
            booking_detail_query().order_by(Booking.created_at.desc()).limit(RECENT_BOOKINGS)
        )

        return {
            "statistics": {
                "total_users": total_users or 0,
                "total_tutors": total_tutors or 0,
                "total_bookings": total_bookings or 0,
                "total_reviews": total_reviews or 0,
                "bookings_by_status": by_status,
            },
            "recent_bookings": list(recent.scalars().all()),
        }

    async def list_users(
        self,
        params: PageParams,
        role: Optional[UserRole] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[User], int]:
        conditions = []
        if role is not None:
            conditions.append(User.role == role)
        if is_active is not None:
            conditions.append(User.is_active == is_active)
        if search:
            conditions.append(
                or_(
                    User.name.icontains(search, autoescape=True),
                    User.email.icontains(search, autoescape=True),
                )
            )

        total = await self.db.scalar(select(func.count(User.id)).where(*conditions))
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.tutor_profile))
            .where(*conditions)
            .order_by(User.created_at.desc())
            .offset(params.offset)
            .limit(params.limit)
        )
        return list(result.scalars().all()), total or 0

    async def get_user(self, user_id: uuid.UUID) -> User:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.tutor_profile))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def set_user_active(self, user_id: uuid.UUID, is_active: bool) -> User:
        user = await self.get_user(user_id)
        user.is_active = is_active

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {e}", exc_info=True)
            raise DatabaseError("Failed to update user")

        logger.info(f"User {user_id} {'enabled' if is_active else 'disabled'}")
        return user

    async def list_bookings(
        self,
        params: PageParams,
        status: Optional[BookingStatus] = None,
    ) -> Tuple[List[Booking], int]:
        conditions = [Booking.status == status] if status is not None else []

        total = await self.db.scalar(select(func.count(Booking.id)).where(*conditions))
        result = await self.db.execute(
            booking_detail_query()
            .where(*conditions)
            .order_by(Booking.created_at.desc())
            .offset(params.offset)
            .limit(params.limit)
        )
        return list(result.scalars().all()), total or 0
