import pytest

from skillbridge.core.config import settings

from conftest import TEST_PASSWORD


def register_payload(**overrides) -> dict:
    payload = {
        "name": "Nina New",
        "email": "nina@example.com",
        "password": "secret123",
        "role": "STUDENT",
    }
    payload.update(overrides)
    return payload


class TestRegister:

    async def test_register_student(self, client):
        response = await client.post("/api/auth/register", json=register_payload(phone="555-0100"))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["token"]
        assert body["user"]["email"] == "nina@example.com"
        assert body["user"]["role"] == "STUDENT"
        assert body["user"]["isActive"] is True
        assert body["user"]["tutorProfile"] is None
        assert "passwordHash" not in body["user"]

    async def test_register_tutor_creates_empty_profile(self, client):
        response = await client.post("/api/auth/register", json=register_payload(role="TUTOR"))

        assert response.status_code == 201
        profile = response.json()["user"]["tutorProfile"]
        assert profile["rating"] == 0
        assert profile["totalReviews"] == 0
        assert profile["subjects"] == []

    async def test_email_is_case_insensitive_and_unique(self, client):
        await client.post("/api/auth/register", json=register_payload())
        response = await client.post("/api/auth/register", json=register_payload(email="NINA@example.com"))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    async def test_admin_self_registration_is_blocked(self, client):
        response = await client.post("/api/auth/register", json=register_payload(role="ADMIN"))
        assert response.status_code == 403

    async def test_admin_self_registration_when_enabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ALLOW_ADMIN_REGISTRATION", True)
        response = await client.post("/api/auth/register", json=register_payload(role="ADMIN"))
        assert response.status_code == 201

    @pytest.mark.parametrize(
        "overrides",
        [{"name": "N"}, {"email": "nope"}, {"password": "123"}, {"role": "GUEST"}],
    )
    async def test_invalid_payload(self, client, overrides):
        response = await client.post("/api/auth/register", json=register_payload(**overrides))

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]


class TestLogin:

    async def test_login_and_me(self, client, student):
        response = await client.post("/api/auth/login", json={"email": student.email, "password": TEST_PASSWORD})

        assert response.status_code == 200
        token = response.json()["token"]

        me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["user"]["id"] == str(student.id)

    async def test_wrong_password(self, client, student):
        response = await client.post("/api/auth/login", json={"email": student.email, "password": "not-it"})

        assert response.status_code == 401
        assert response.json()["error"] == {
            "code": "UNAUTHORIZED",
            "message": "Invalid email or password",
            "details": None,
        }

    async def test_unknown_email(self, client):
        response = await client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
        assert response.status_code == 401

    async def test_disabled_account_cannot_login(self, client, make_user):
        user = await make_user(is_active=False)
        response = await client.post("/api/auth/login", json={"email": user.email, "password": TEST_PASSWORD})
        assert response.status_code == 403


class TestTokens:

    async def test_missing_token(self, client):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "No token provided"

    async def test_garbage_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401

    async def test_token_of_disabled_user(self, client, make_user, auth_headers):
        user = await make_user(is_active=False)
        response = await client.get("/api/auth/me", headers=auth_headers(user))
        assert response.status_code == 403

    async def test_tutor_me_includes_profile(self, client, tutor, auth_headers):
        response = await client.get("/api/auth/me", headers=auth_headers(tutor.user))

        assert response.status_code == 200
        assert response.json()["user"]["tutorProfile"]["id"] == str(tutor.id)
