import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.core.exceptions import DatabaseError, NotFoundError
from skillbridge.core.pagination import PageParams
from skillbridge.models.booking import Booking
from skillbridge.models.review import Review
from skillbridge.models.tutor_profile import TutorProfile
from skillbridge.schemas.tutor import TutorProfileUpdate
from skillbridge.services.booking_service import booking_detail_query

logger = logging.getLogger(__name__)

# Columns that cannot be cleared with an explicit null
NON_NULLABLE_FIELDS = {"subjects", "experience"}


class TutorService:
    """Public tutor directory and tutor self-service profile edits"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_tutors(
        self,
        params: PageParams,
        subject: Optional[str] = None,
        min_rating: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> Tuple[List[TutorProfile], int]:
        """List/search tutors with filters, best rated first"""
        conditions = []

        if subject and subject.strip():
            conditions.append(self._has_subject(subject.strip()))

        if min_rating is not None:
            conditions.append(TutorProfile.rating >= min_rating)

        if max_price is not None:
            conditions.append(TutorProfile.hourly_rate <= max_price)

        total = await self.db.scalar(select(func.count(TutorProfile.id)).where(*conditions))
        result = await self.db.execute(
            select(TutorProfile)
            .options(selectinload(TutorProfile.user))
            .where(*conditions)
            .order_by(TutorProfile.rating.desc(), TutorProfile.created_at.asc())
            .offset(params.offset)
            .limit(params.limit)
        )
        return list(result.scalars().all()), total or 0

    def _has_subject(self, subject: str):
        """EXISTS over the elements of the JSON subjects array, compared lowercased"""
        if self.db.get_bind().dialect.name == "postgresql":
            elements = func.json_array_elements_text(TutorProfile.subjects)
        else:
            elements = func.json_each(TutorProfile.subjects)
        element = elements.table_valued("value").alias("subject_element")

        return exists(
            select(1)
            .select_from(element)
            .where(func.lower(element.c.value) == subject.lower())
        )

    async def get_tutor(self, tutor_id: uuid.UUID) -> TutorProfile:
        """Tutor profile with account, availability and reviews"""
        result = await self.db.execute(
            select(TutorProfile)
            .options(
                selectinload(TutorProfile.user),
                selectinload(TutorProfile.availability),
                selectinload(TutorProfile.reviews).selectinload(Review.student),
            )
            .where(TutorProfile.id == tutor_id)
            .execution_options(populate_existing=True)
        )
        tutor = result.scalar_one_or_none()
        if tutor is None:
            raise NotFoundError("Tutor not found")
        return tutor

    async def update_profile(self, user_id: uuid.UUID, request: TutorProfileUpdate) -> TutorProfile:
        """Apply only the fields present in the request; rating fields are never touched"""
        profile = await self.get_profile_for_user(user_id)

        for field, value in request.model_dump(exclude_unset=True).items():
            if value is None and field in NON_NULLABLE_FIELDS:
                continue
            setattr(profile, field, value)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update tutor profile {profile.id}: {e}", exc_info=True)
            raise DatabaseError("Failed to update tutor profile")

        logger.info(f"Tutor profile {profile.id} updated")
        return profile

    async def my_bookings(self, user_id: uuid.UUID) -> List[Booking]:
        profile = await self.get_profile_for_user(user_id)
        result = await self.db.execute(
            booking_detail_query()
            .where(Booking.tutor_id == profile.id)
            .order_by(Booking.session_date.desc())
        )
        return list(result.scalars().all())

    async def get_profile_for_user(self, user_id: uuid.UUID) -> TutorProfile:
        result = await self.db.execute(select(TutorProfile).where(TutorProfile.user_id == user_id))
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError("Tutor profile not found")
        return profile
