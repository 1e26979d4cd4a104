import logging
import uuid
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.core.auth import create_access_token, get_password_hash_async, verify_password_async
from skillbridge.core.config import settings
from skillbridge.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
)
from skillbridge.models.tutor_profile import TutorProfile
from skillbridge.models.user import User, UserRole
from skillbridge.schemas.user import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class UserService:
    """Account registration, login and lookup"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, request: RegisterRequest) -> Tuple[User, str]:
        """
        Create an account and return it with an access token.

        TUTOR accounts get an empty TutorProfile in the same transaction.
        """
        if request.role == UserRole.ADMIN and not settings.ALLOW_ADMIN_REGISTRATION:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        email = request.email.lower()
        if await self._find_by_email(email) is not None:
            raise ConflictError("User already exists")

        user = User(
            name=request.name,
            email=email,
            password_hash=await get_password_hash_async(request.password),
            phone=request.phone or None,
            role=request.role,
        )

        try:
            self.db.add(user)
            await self.db.flush()
            if user.role == UserRole.TUTOR:
                self.db.add(TutorProfile(user_id=user.id))
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to register {email}: {e}", exc_info=True)
            raise DatabaseError("Failed to register user")

        logger.info(f"Registered {user.role.value} account {user.id}")
        user = await self.get_user(user.id)
        return user, create_access_token(user)

    async def login(self, request: LoginRequest) -> Tuple[User, str]:
        user = await self._find_by_email(request.email.lower())

        if user is None or not await verify_password_async(request.password, user.password_hash):
            logger.warning(f"Failed login attempt for {request.email}")
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthorizationError("Your account has been disabled")

        return user, create_access_token(user)

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

    async def _find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).options(selectinload(User.tutor_profile)).where(User.email == email)
        )
        return result.scalar_one_or_none()
