from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import logging
import uuid

from skillbridge.models.availability import Availability
from skillbridge.models.tutor_profile import TutorProfile
from skillbridge.schemas.availability import AvailabilityCreateRequest
from skillbridge.core.exceptions import AuthorizationError, DatabaseError, NotFoundError

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service for managing a tutor's recurring weekly availability slots"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_slots(self, tutor_user_id: uuid.UUID) -> List[Availability]:
        """Get the caller's slots ordered by day and start time"""
        profile = await self._get_profile(tutor_user_id)
        result = await self.db.execute(
            select(Availability)
            .where(Availability.tutor_id == profile.id)
            .order_by(Availability.day_of_week.asc(), Availability.start_time.asc())
        )
        return list(result.scalars().all())

    async def add_slot(self, tutor_user_id: uuid.UUID, request: AvailabilityCreateRequest) -> Availability:
        """
        Add a weekly window for the caller's tutor profile.

        The request schema has already checked the day range, HH:MM format,
        ordering and the 30 minute minimum. Overlaps with existing slots are
        not checked.
        """
        profile = await self._get_profile(tutor_user_id)

        slot = Availability(
            tutor_id=profile.id,
            day_of_week=request.day_of_week,
            start_time=request.start_time,
            end_time=request.end_time,
        )

        try:
            self.db.add(slot)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to add availability for tutor {profile.id}: {e}", exc_info=True)
            raise DatabaseError("Failed to add availability")

        logger.info(
            f"Availability {slot.id} added for tutor {profile.id}: day {slot.day_of_week} {slot.start_time}-{slot.end_time}"
        )
        return slot

    async def delete_slot(self, slot_id: uuid.UUID, tutor_user_id: uuid.UUID) -> None:
        """Remove one of the caller's slots"""
        slot = await self.db.get(Availability, slot_id)
        if slot is None:
            raise NotFoundError("Availability not found")

        profile = await self._get_profile(tutor_user_id)
        if slot.tutor_id != profile.id:
            raise AuthorizationError("Not authorized to delete this availability")

        try:
            await self.db.delete(slot)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to delete availability {slot_id}: {e}", exc_info=True)
            raise DatabaseError("Failed to delete availability")

        logger.info(f"Availability {slot_id} deleted for tutor {profile.id}")

    async def _get_profile(self, tutor_user_id: uuid.UUID) -> TutorProfile:
        result = await self.db.execute(select(TutorProfile).where(TutorProfile.user_id == tutor_user_id))
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError("Tutor profile not found")
        return profile
