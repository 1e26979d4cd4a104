"""
Shared fixtures: an in-memory SQLite database per test, factories for the
usual actors, and an HTTP client bound to the app with ``get_db`` overridden.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from skillbridge.core.auth import create_access_token, get_password_hash
from skillbridge.core.config import settings
from skillbridge.core.database import Base, get_db
from skillbridge.main import app
from skillbridge.models import Booking, BookingStatus, Category, TutorProfile, User, UserRole

TEST_PASSWORD = "password123"

# bcrypt is slow; hash once for every fixture user
PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


def future(days: int = 3) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _auth_headers


@pytest.fixture(autouse=True)
def disable_rate_limit(monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", False)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make_user(role: UserRole = UserRole.STUDENT, name: str = None, email: str = None, is_active: bool = True):
        suffix = uuid.uuid4().hex[:8]
        user = User(
            name=name or f"{role.value.title()} {suffix}",
            email=email or f"{role.value.lower()}-{suffix}@example.com",
            password_hash=PASSWORD_HASH,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_tutor(db, make_user):
    async def _make_tutor(**profile):
        user = await make_user(UserRole.TUTOR)
        profile.setdefault("subjects", ["Math"])
        tutor = TutorProfile(user=user, **profile)
        db.add(tutor)
        await db.commit()
        return tutor

    return _make_tutor


@pytest.fixture
def make_booking(db):
    async def _make_booking(student: User, tutor: TutorProfile, category: Category,
                            status: BookingStatus = BookingStatus.CONFIRMED):
        booking = Booking(
            student_id=student.id,
            tutor_id=tutor.id,
            category_id=category.id,
            subject="Algebra",
            session_date=future(),
            duration=60,
            price=40.0,
            status=status,
        )
        db.add(booking)
        await db.commit()
        return booking

    return _make_booking


@pytest.fixture
async def student(make_user):
    return await make_user(UserRole.STUDENT, name="Sam Student")


@pytest.fixture
async def other_student(make_user):
    return await make_user(UserRole.STUDENT, name="Olive Other")


@pytest.fixture
async def admin(make_user):
    return await make_user(UserRole.ADMIN, name="Ada Admin")


@pytest.fixture
async def tutor(make_tutor):
    return await make_tutor(hourly_rate=40.0, subjects=["Math", "Physics"], bio="Patient and clear")


@pytest.fixture
async def other_tutor(make_tutor):
    return await make_tutor(hourly_rate=80.0, subjects=["Chemistry"])


@pytest.fixture
async def category(db):
    category = Category(name="Mathematics", description="Numbers and beyond")
    db.add(category)
    await db.commit()
    return category
