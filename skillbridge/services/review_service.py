import logging
import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.core.exceptions import (
    AuthorizationError,
    DatabaseError,
    NotFoundError,
    ReviewError,
)
from skillbridge.core.pagination import PageParams
from skillbridge.models.booking import Booking, BookingStatus
from skillbridge.models.review import Review
from skillbridge.models.tutor_profile import TutorProfile
from skillbridge.schemas.review import ReviewCreateRequest, ReviewUpdateRequest

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def average_rating(total: int, count: int) -> float:
    """Unweighted mean rounded half-up to two decimals; 0 when there are no reviews"""
    if count == 0:
        return 0.0
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


class ReviewService:
    """
    Reviews for completed bookings and the tutor rating derived from them.

    Every write locks the tutor profile row, applies the review change and
    recomputes ``rating``/``total_reviews`` from the full review set before a
    single commit, so concurrent writers for one tutor are serialised on
    backends with row locks and nothing is half-applied on failure.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_review(self, student_id: uuid.UUID, request: ReviewCreateRequest) -> Review:
        booking = await self.db.get(Booking, request.booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")

        if booking.student_id != student_id:
            raise AuthorizationError("Not authorized to review this booking")

        if booking.status != BookingStatus.COMPLETED:
            raise ReviewError("Can only review completed bookings")

        existing = await self.db.execute(select(Review.id).where(Review.booking_id == booking.id))
        if existing.scalar_one_or_none() is not None:
            raise ReviewError("Review already exists for this booking")

        try:
            await self._lock_tutor(booking.tutor_id)
            review = Review(
                booking_id=booking.id,
                tutor_id=booking.tutor_id,
                student_id=student_id,
                rating=request.rating,
                comment=request.comment,
            )
            self.db.add(review)
            await self.db.flush()
            await self.recompute_tutor_rating(booking.tutor_id)
            await self.db.commit()
        except IntegrityError:
            # Lost a race with another insert for the same booking
            await self.db.rollback()
            logger.warning(f"Duplicate review rejected for booking {booking.id}")
            raise ReviewError("Review already exists for this booking")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to create review for booking {booking.id}: {e}", exc_info=True)
            raise DatabaseError("Failed to create review")

        logger.info(f"Review {review.id} ({review.rating}/5) created for booking {booking.id}")
        return await self._load_review(review.id)

    async def update_review(
        self,
        review_id: uuid.UUID,
        actor_student_id: uuid.UUID,
        request: ReviewUpdateRequest,
    ) -> Review:
        review = await self._get_owned_review(review_id, actor_student_id, "update")

        try:
            await self._lock_tutor(review.tutor_id)
            if request.rating is not None:
                review.rating = request.rating
            if "comment" in request.model_fields_set:
                review.comment = request.comment
            await self.db.flush()
            await self.recompute_tutor_rating(review.tutor_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update review {review_id}: {e}", exc_info=True)
            raise DatabaseError("Failed to update review")

        logger.info(f"Review {review_id} updated")
        return await self._load_review(review_id)

    async def delete_review(self, review_id: uuid.UUID, actor_student_id: uuid.UUID) -> None:
        review = await self._get_owned_review(review_id, actor_student_id, "delete")
        tutor_id = review.tutor_id

        try:
            await self._lock_tutor(tutor_id)
            await self.db.delete(review)
            await self.db.flush()
            await self.recompute_tutor_rating(tutor_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to delete review {review_id}: {e}", exc_info=True)
            raise DatabaseError("Failed to delete review")

        logger.info(f"Review {review_id} deleted")

    async def get_review(self, review_id: uuid.UUID) -> Review:
        review = await self._load_review(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review

    async def list_for_tutor(self, tutor_id: uuid.UUID, params: PageParams) -> Tuple[List[Review], int]:
        """Public review list for a tutor, newest first"""
        if await self.db.get(TutorProfile, tutor_id) is None:
            raise NotFoundError("Tutor not found")

        total = await self.db.scalar(select(func.count(Review.id)).where(Review.tutor_id == tutor_id))
        result = await self.db.execute(
            select(Review)
            .options(selectinload(Review.student))
            .where(Review.tutor_id == tutor_id)
            .order_by(Review.created_at.desc())
            .offset(params.offset)
            .limit(params.limit)
        )
        return list(result.scalars().all()), total or 0

    async def recompute_tutor_rating(self, tutor_id: uuid.UUID) -> TutorProfile:
        """
        Rewrite the tutor's rating and total_reviews from the current review set.

        Runs inside the caller's transaction; pending review changes must be
        flushed first.
        """
        profile = await self.db.get(TutorProfile, tutor_id)
        if profile is None:
            raise NotFoundError("Tutor not found")

        result = await self.db.execute(
            select(func.count(Review.id), func.coalesce(func.sum(Review.rating), 0))
            .where(Review.tutor_id == tutor_id)
        )
        count, total = result.one()

        profile.rating = average_rating(int(total), int(count))
        profile.total_reviews = int(count)
        logger.info(f"Tutor {tutor_id} rating recomputed: {profile.rating} over {profile.total_reviews} reviews")
        return profile

    async def _lock_tutor(self, tutor_id: uuid.UUID) -> None:
        # FOR UPDATE is dropped by backends without row locks (SQLite)
        result = await self.db.execute(
            select(TutorProfile)
            .where(TutorProfile.id == tutor_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Tutor not found")

    async def _get_owned_review(self, review_id: uuid.UUID, student_id: uuid.UUID, action: str) -> Review:
        review = await self.db.get(Review, review_id)
        if review is None:
            raise NotFoundError("Review not found")
        if review.student_id != student_id:
            raise AuthorizationError(f"Not authorized to {action} this review")
        return review

    async def _load_review(self, review_id: uuid.UUID) -> Optional[Review]:
        result = await self.db.execute(
            select(Review)
            .options(selectinload(Review.student))
            .where(Review.id == review_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
