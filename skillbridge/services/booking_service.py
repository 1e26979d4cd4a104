import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional, Tuple, List

import pytz
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.core.exceptions import (
    AuthorizationError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from skillbridge.core.pagination import PageParams
from skillbridge.models.booking import Booking, BookingStatus
from skillbridge.models.category import Category
from skillbridge.models.tutor_profile import TutorProfile
from skillbridge.models.user import User, UserRole
from skillbridge.schemas.booking import BookingCreateRequest

logger = logging.getLogger(__name__)


# Role -> {current status -> statuses the owner may move to}. ADMIN is unrestricted.
OWNER_TRANSITIONS: Dict[UserRole, Dict[BookingStatus, FrozenSet[BookingStatus]]] = {
    UserRole.STUDENT: {
        BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    },
    UserRole.TUTOR: {
        BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    },
}


def booking_detail_query():
    """Booking select with everything a response needs eagerly loaded"""
    return select(Booking).options(
        selectinload(Booking.student),
        selectinload(Booking.category),
        selectinload(Booking.tutor).selectinload(TutorProfile.user),
        selectinload(Booking.review),
    )


def allowed_targets(role: UserRole, current: BookingStatus) -> FrozenSet[BookingStatus]:
    if role == UserRole.ADMIN:
        return frozenset(BookingStatus)
    return OWNER_TRANSITIONS.get(role, {}).get(current, frozenset())


class BookingService:
    """Booking lifecycle: creation and role-restricted status transitions"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_booking(self, student_id: uuid.UUID, request: BookingCreateRequest) -> Booking:
        """Create a CONFIRMED booking for a student"""
        session_date = request.session_date
        if session_date.tzinfo is None:
            session_date = pytz.utc.localize(session_date)
        session_date = session_date.astimezone(pytz.utc)

        if session_date <= datetime.now(timezone.utc):
            raise ValidationError("Session date must be in the future")

        tutor = await self.db.get(TutorProfile, request.tutor_id)
        if tutor is None:
            raise NotFoundError("Tutor not found")

        category = await self.db.get(Category, request.category_id)
        if category is None:
            raise NotFoundError("Category not found")

        # No check against the tutor's Availability windows
        booking = Booking(
            student_id=student_id,
            tutor_id=tutor.id,
            category_id=category.id,
            subject=request.subject,
            session_date=session_date,
            duration=request.duration,
            price=request.price,
            notes=request.notes,
            payment_method=request.payment_method,
            status=BookingStatus.CONFIRMED,
        )

        try:
            self.db.add(booking)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create booking: {e}", exc_info=True)
            raise DatabaseError("Failed to create booking")

        logger.info(f"Booking {booking.id} created by student {student_id} with tutor {tutor.id}")
        return await self._load_booking(booking.id)

    async def list_bookings(
        self,
        user: User,
        params: PageParams,
        status: Optional[BookingStatus] = None,
    ) -> Tuple[List[Booking], int]:
        """List bookings visible to the user, newest session first"""
        conditions = []

        if user.role == UserRole.STUDENT:
            conditions.append(Booking.student_id == user.id)
        elif user.role == UserRole.TUTOR:
            profile = await self._get_tutor_profile(user.id)
            if profile is None:
                raise NotFoundError("Tutor profile not found")
            conditions.append(Booking.tutor_id == profile.id)

        if status is not None:
            conditions.append(Booking.status == status)

        total = await self.db.scalar(select(func.count(Booking.id)).where(*conditions))

        result = await self.db.execute(
            booking_detail_query()
            .where(*conditions)
            .order_by(Booking.session_date.desc())
            .offset(params.offset)
            .limit(params.limit)
        )
        return list(result.scalars().all()), total or 0

    async def get_booking(self, booking_id: uuid.UUID, user: User) -> Booking:
        """Fetch a booking visible to its student, its tutor or an admin"""
        booking = await self._load_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")

        if not await self._is_owner(booking, user.role, user.id) and user.role != UserRole.ADMIN:
            raise AuthorizationError("Not authorized to view this booking")

        return booking

    async def transition(
        self,
        booking_id: uuid.UUID,
        actor_role: UserRole,
        actor_id: uuid.UUID,
        target_status: BookingStatus,
    ) -> Booking:
        """
        Move a booking to ``target_status``.

        Students may cancel their own confirmed bookings; tutors may complete
        or cancel confirmed bookings on their profile; admins may set any
        status. Nothing else changes on the booking.
        """
        booking = await self.db.get(Booking, booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")

        if actor_role != UserRole.ADMIN:
            if not await self._is_owner(booking, actor_role, actor_id):
                logger.warning(f"User {actor_id} ({actor_role.value}) tried to update booking {booking_id} they do not own")
                raise AuthorizationError("Not authorized to update this booking")

            if target_status not in allowed_targets(actor_role, booking.status):
                logger.warning(
                    f"Rejected {actor_role.value} transition {booking.status.value} -> {target_status.value} on booking {booking_id}"
                )
                raise AuthorizationError(self._transition_denied_message(actor_role, booking.status))

        previous = booking.status
        booking.status = target_status

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update booking {booking_id}: {e}", exc_info=True)
            raise DatabaseError("Failed to update booking")

        logger.info(f"Booking {booking_id} moved {previous.value} -> {target_status.value} by {actor_role.value} {actor_id}")
        return await self._load_booking(booking_id)

    async def cancel(self, booking_id: uuid.UUID, actor_role: UserRole, actor_id: uuid.UUID) -> Booking:
        """Soft-cancel: same rules as a transition to CANCELLED"""
        return await self.transition(booking_id, actor_role, actor_id, BookingStatus.CANCELLED)

    async def _is_owner(self, booking: Booking, role: UserRole, user_id: uuid.UUID) -> bool:
        if role == UserRole.STUDENT:
            return booking.student_id == user_id
        if role == UserRole.TUTOR:
            profile = await self._get_tutor_profile(user_id)
            return profile is not None and profile.id == booking.tutor_id
        return False

    @staticmethod
    def _transition_denied_message(role: UserRole, current: BookingStatus) -> str:
        if current != BookingStatus.CONFIRMED:
            return f"Cannot change a {current.value.lower()} booking"
        if role == UserRole.STUDENT:
            return "Students can only cancel bookings"
        return "Tutors can only mark as completed or cancel"

    async def _get_tutor_profile(self, user_id: uuid.UUID) -> Optional[TutorProfile]:
        result = await self.db.execute(select(TutorProfile).where(TutorProfile.user_id == user_id))
        return result.scalar_one_or_none()

    async def _load_booking(self, booking_id: uuid.UUID) -> Optional[Booking]:
        result = await self.db.execute(
            booking_detail_query()
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
