"""
Unit tests for ReviewService and the tutor rating it maintains
"""
import uuid

import pytest

from skillbridge.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from skillbridge.core.pagination import PageParams
from skillbridge.models import BookingStatus
from skillbridge.schemas.review import ReviewCreateRequest, ReviewUpdateRequest
from skillbridge.services.review_service import ReviewService, average_rating


@pytest.fixture
def completed_booking(student, tutor, category, make_booking):
    async def _completed_booking(for_student=None):
        return await make_booking(for_student or student, tutor, category, status=BookingStatus.COMPLETED)

    return _completed_booking


def review_request(booking, rating=5, comment=None) -> ReviewCreateRequest:
    return ReviewCreateRequest(booking_id=booking.id, rating=rating, comment=comment)


@pytest.mark.parametrize(
    "total,count,expected",
    [
        (0, 0, 0.0),
        (9, 2, 4.5),
        (14, 3, 4.67),
        (10, 3, 3.33),
        (5, 1, 5.0),
    ],
)
def test_average_rating(total, count, expected):
    assert average_rating(total, count) == expected


def test_average_rating_rounds_half_up():
    # 2.345 exactly; binary floats would round this down
    assert average_rating(469, 200) == 2.35


class TestCreateReview:

    async def test_first_review_sets_rating(self, db, student, tutor, completed_booking):
        booking = await completed_booking()

        review = await ReviewService(db).create_review(student.id, review_request(booking, 5, "Great"))

        assert review.rating == 5
        assert review.student.name == "Sam Student"
        assert tutor.rating == 5.0
        assert tutor.total_reviews == 1

    async def test_two_reviews_average(self, db, student, tutor, completed_booking):
        service = ReviewService(db)
        await service.create_review(student.id, review_request(await completed_booking(), 4))
        await service.create_review(student.id, review_request(await completed_booking(), 5))

        assert tutor.rating == 4.5
        assert tutor.total_reviews == 2

    @pytest.mark.parametrize("status", [BookingStatus.CONFIRMED, BookingStatus.CANCELLED])
    async def test_rejects_unfinished_booking(self, db, student, tutor, category, make_booking, status):
        booking = await make_booking(student, tutor, category, status=status)

        with pytest.raises(ConflictError, match="completed"):
            await ReviewService(db).create_review(student.id, review_request(booking))

        assert tutor.total_reviews == 0

    async def test_one_review_per_booking(self, db, student, tutor, completed_booking):
        booking = await completed_booking()
        service = ReviewService(db)
        await service.create_review(student.id, review_request(booking, 3))

        with pytest.raises(ConflictError, match="already exists"):
            await service.create_review(student.id, review_request(booking, 5))

        assert tutor.rating == 3.0
        assert tutor.total_reviews == 1

    async def test_only_the_booking_student_may_review(self, db, other_student, completed_booking):
        booking = await completed_booking()
        with pytest.raises(AuthorizationError):
            await ReviewService(db).create_review(other_student.id, review_request(booking))

    async def test_unknown_booking(self, db, student):
        request = ReviewCreateRequest(booking_id=uuid.uuid4(), rating=4)
        with pytest.raises(NotFoundError):
            await ReviewService(db).create_review(student.id, request)


class TestUpdateAndDelete:

    async def test_rating_follows_create_update_delete(self, db, student, tutor, completed_booking):
        service = ReviewService(db)
        first = await service.create_review(student.id, review_request(await completed_booking(), 2))
        second = await service.create_review(student.id, review_request(await completed_booking(), 4))
        assert (tutor.rating, tutor.total_reviews) == (3.0, 2)

        await service.update_review(first.id, student.id, ReviewUpdateRequest(rating=5))
        assert (tutor.rating, tutor.total_reviews) == (4.5, 2)

        await service.delete_review(second.id, student.id)
        assert (tutor.rating, tutor.total_reviews) == (5.0, 1)

        await service.delete_review(first.id, student.id)
        assert (tutor.rating, tutor.total_reviews) == (0.0, 0)

    async def test_update_comment_only_keeps_rating(self, db, student, tutor, completed_booking):
        service = ReviewService(db)
        review = await service.create_review(student.id, review_request(await completed_booking(), 4, "ok"))

        updated = await service.update_review(review.id, student.id, ReviewUpdateRequest(comment="Really good"))

        assert updated.rating == 4
        assert updated.comment == "Really good"
        assert tutor.rating == 4.0

    async def test_other_student_cannot_update_or_delete(self, db, student, other_student, completed_booking):
        service = ReviewService(db)
        review = await service.create_review(student.id, review_request(await completed_booking(), 4))

        with pytest.raises(AuthorizationError):
            await service.update_review(review.id, other_student.id, ReviewUpdateRequest(rating=1))
        with pytest.raises(AuthorizationError):
            await service.delete_review(review.id, other_student.id)

    async def test_missing_review(self, db, student):
        with pytest.raises(NotFoundError):
            await ReviewService(db).delete_review(uuid.uuid4(), student.id)


class TestListing:

    async def test_list_for_tutor_paginates(self, db, student, tutor, completed_booking):
        service = ReviewService(db)
        for rating in (3, 4, 5):
            await service.create_review(student.id, review_request(await completed_booking(), rating))

        reviews, total = await service.list_for_tutor(tutor.id, PageParams(page=1, limit=2))

        assert total == 3
        assert len(reviews) == 2

    async def test_list_for_unknown_tutor(self, db):
        with pytest.raises(NotFoundError):
            await ReviewService(db).list_for_tutor(uuid.uuid4(), PageParams())
