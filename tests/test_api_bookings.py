"""
HTTP tests for bookings and reviews, including the end-to-end rating flows
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from skillbridge.models import BookingStatus


def booking_payload(tutor, category, **overrides) -> dict:
    payload = {
        "tutorId": str(tutor.id),
        "categoryId": str(category.id),
        "subject": "Linear algebra",
        "sessionDate": (datetime.now(timezone.utc) + timedelta(days=5)).isoformat(),
        "duration": 60,
        "price": 50,
    }
    payload.update(overrides)
    return payload


async def create_booking(client, headers, tutor, category) -> dict:
    response = await client.post("/api/bookings", json=booking_payload(tutor, category), headers=headers)
    assert response.status_code == 201
    return response.json()["booking"]


class TestCreateBooking:

    async def test_student_books_session(self, client, student, tutor, category, auth_headers):
        response = await client.post(
            "/api/bookings",
            json=booking_payload(tutor, category, notes="Bring exercises"),
            headers=auth_headers(student),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Booking created successfully"
        booking = body["booking"]
        assert booking["status"] == "CONFIRMED"
        assert booking["studentId"] == str(student.id)
        assert booking["tutor"]["user"]["id"] == str(tutor.user_id)
        assert booking["category"]["name"] == "Mathematics"
        assert booking["notes"] == "Bring exercises"
        assert booking["review"] is None

    @pytest.mark.parametrize("role_fixture", ["admin", "tutor_user"])
    async def test_only_students_can_book(self, client, tutor, category, auth_headers, admin, role_fixture):
        actor = admin if role_fixture == "admin" else tutor.user
        response = await client.post("/api/bookings", json=booking_payload(tutor, category), headers=auth_headers(actor))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    async def test_past_date_is_rejected(self, client, student, tutor, category, auth_headers):
        past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
        response = await client.post(
            "/api/bookings",
            json=booking_payload(tutor, category, sessionDate=past),
            headers=auth_headers(student),
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Session date must be in the future"

    async def test_boolean_price_is_rejected(self, client, student, tutor, category, auth_headers):
        response = await client.post(
            "/api/bookings",
            json=booking_payload(tutor, category, price=True),
            headers=auth_headers(student),
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_unknown_tutor(self, client, student, tutor, category, auth_headers):
        response = await client.post(
            "/api/bookings",
            json=booking_payload(tutor, category, tutorId=str(uuid.uuid4())),
            headers=auth_headers(student),
        )
        assert response.status_code == 404

    async def test_requires_authentication(self, client, tutor, category):
        response = await client.post("/api/bookings", json=booking_payload(tutor, category))
        assert response.status_code == 401


class TestTransitionMatrix:

    @pytest.mark.parametrize(
        "actor,target,expected",
        [
            ("student", "CANCELLED", 200),
            ("student", "COMPLETED", 403),
            ("tutor", "COMPLETED", 200),
            ("tutor", "CANCELLED", 200),
            ("other_tutor", "COMPLETED", 403),
            ("other_student", "CANCELLED", 403),
            ("admin", "COMPLETED", 200),
        ],
    )
    async def test_patch_status(
        self, client, student, other_student, tutor, other_tutor, admin, category,
        make_booking, auth_headers, actor, target, expected,
    ):
        actors = {
            "student": student,
            "other_student": other_student,
            "tutor": tutor.user,
            "other_tutor": other_tutor.user,
            "admin": admin,
        }
        booking = await make_booking(student, tutor, category)

        response = await client.patch(
            f"/api/bookings/{booking.id}", json={"status": target}, headers=auth_headers(actors[actor])
        )

        assert response.status_code == expected
        if expected == 200:
            assert response.json()["booking"]["status"] == target

    async def test_delete_is_a_soft_cancel(self, client, student, tutor, category, make_booking, auth_headers):
        booking = await make_booking(student, tutor, category)

        response = await client.delete(f"/api/bookings/{booking.id}", headers=auth_headers(student))
        assert response.status_code == 200
        assert response.json()["booking"]["status"] == "CANCELLED"

        fetched = await client.get(f"/api/bookings/{booking.id}", headers=auth_headers(student))
        assert fetched.status_code == 200
        assert fetched.json()["status"] == "CANCELLED"

    async def test_unknown_status_value(self, client, student, tutor, category, make_booking, auth_headers):
        booking = await make_booking(student, tutor, category)
        response = await client.patch(
            f"/api/bookings/{booking.id}", json={"status": "PENDING"}, headers=auth_headers(student)
        )
        assert response.status_code == 400

    async def test_malformed_booking_id(self, client, student, auth_headers):
        response = await client.get("/api/bookings/not-a-uuid", headers=auth_headers(student))
        assert response.status_code == 400


class TestListBookings:

    async def test_pagination_and_filter(self, client, student, tutor, category, make_booking, auth_headers):
        for _ in range(3):
            await make_booking(student, tutor, category)
        await make_booking(student, tutor, category, status=BookingStatus.COMPLETED)

        response = await client.get("/api/bookings?page=2&limit=2", headers=auth_headers(student))
        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 4, "pages": 2}
        assert len(body["data"]) == 2

        completed = await client.get("/api/bookings?status=COMPLETED", headers=auth_headers(student))
        assert completed.json()["pagination"]["total"] == 1

    async def test_out_of_range_paging_is_clamped(self, client, student, auth_headers):
        response = await client.get("/api/bookings?page=0&limit=500", headers=auth_headers(student))

        assert response.status_code == 200
        assert response.json()["pagination"] == {"page": 1, "limit": 50, "total": 0, "pages": 0}

    async def test_stranger_cannot_view_booking(
        self, client, student, other_student, tutor, category, make_booking, auth_headers
    ):
        booking = await make_booking(student, tutor, category)
        response = await client.get(f"/api/bookings/{booking.id}", headers=auth_headers(other_student))
        assert response.status_code == 403


class TestReviewFlows:

    async def test_review_lifecycle_updates_tutor_rating(self, client, student, tutor, category, auth_headers):
        student_headers = auth_headers(student)
        booking = await create_booking(client, student_headers, tutor, category)

        early = await client.post(
            "/api/reviews", json={"bookingId": booking["id"], "rating": 5}, headers=student_headers
        )
        assert early.status_code == 409

        completed = await client.patch(
            f"/api/bookings/{booking['id']}", json={"status": "COMPLETED"}, headers=auth_headers(tutor.user)
        )
        assert completed.status_code == 200

        created = await client.post(
            "/api/reviews",
            json={"bookingId": booking["id"], "rating": 5, "comment": "Excellent"},
            headers=student_headers,
        )
        assert created.status_code == 201
        review = created.json()["review"]
        assert review["student"]["name"] == "Sam Student"

        detail = (await client.get(f"/api/tutors/{tutor.id}")).json()
        assert (detail["rating"], detail["totalReviews"]) == (5.0, 1)
        assert detail["reviews"][0]["id"] == review["id"]

        duplicate = await client.post(
            "/api/reviews", json={"bookingId": booking["id"], "rating": 1}, headers=student_headers
        )
        assert duplicate.status_code == 409

        deleted = await client.delete(f"/api/reviews/{review['id']}", headers=student_headers)
        assert deleted.status_code == 200

        detail = (await client.get(f"/api/tutors/{tutor.id}")).json()
        assert (detail["rating"], detail["totalReviews"]) == (0, 0)
        assert detail["reviews"] == []

    async def test_two_reviews_average_to_four_and_a_half(
        self, client, student, tutor, category, make_booking, auth_headers
    ):
        headers = auth_headers(student)
        for rating in (4, 5):
            booking = await make_booking(student, tutor, category, status=BookingStatus.COMPLETED)
            response = await client.post(
                "/api/reviews", json={"bookingId": str(booking.id), "rating": rating}, headers=headers
            )
            assert response.status_code == 201

        listing = (await client.get(f"/api/reviews/tutor/{tutor.id}")).json()
        assert listing["pagination"]["total"] == 2

        tutors = (await client.get("/api/tutors")).json()["data"]
        assert tutors[0]["id"] == str(tutor.id)
        assert tutors[0]["rating"] == 4.5

    async def test_update_review(self, client, student, other_student, tutor, category, make_booking, auth_headers):
        booking = await make_booking(student, tutor, category, status=BookingStatus.COMPLETED)
        created = await client.post(
            "/api/reviews", json={"bookingId": str(booking.id), "rating": 2}, headers=auth_headers(student)
        )
        review_id = created.json()["review"]["id"]

        forbidden = await client.put(
            f"/api/reviews/{review_id}", json={"rating": 5}, headers=auth_headers(other_student)
        )
        assert forbidden.status_code == 403

        updated = await client.put(
            f"/api/reviews/{review_id}", json={"rating": 4, "comment": "Grew on me"}, headers=auth_headers(student)
        )
        assert updated.status_code == 200
        assert updated.json()["review"]["rating"] == 4

        fetched = (await client.get(f"/api/reviews/{review_id}")).json()
        assert fetched["comment"] == "Grew on me"
        assert (await client.get(f"/api/tutors/{tutor.id}")).json()["rating"] == 4.0

    async def test_tutor_cannot_write_reviews(self, client, student, tutor, category, make_booking, auth_headers):
        booking = await make_booking(student, tutor, category, status=BookingStatus.COMPLETED)
        response = await client.post(
            "/api/reviews", json={"bookingId": str(booking.id), "rating": 5}, headers=auth_headers(tutor.user)
        )
        assert response.status_code == 403
