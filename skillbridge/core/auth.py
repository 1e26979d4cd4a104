"""
Bearer-token authentication and role gating.

Tokens are HS256 JWTs carrying the user id (``sub``), email and role. The
user row is re-read on every request so disabled accounts lose access
immediately.
"""
import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.core.config import settings
from skillbridge.core.database import get_db
from skillbridge.core.exceptions import AuthenticationError, AuthorizationError
from skillbridge.models.user import User, UserRole

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Security scheme
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        bool: True if password matches, False otherwise
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except ValueError as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def get_password_hash(password: str) -> str:
    return str(pwd_context.hash(password))


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Run bcrypt off the event loop"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, verify_password, plain_password, hashed_password)


async def get_password_hash_async(password: str) -> str:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_password_hash, password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user: The authenticated user
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except PyJWTError as e:
        logger.warning(f"JWT validation error: {str(e)}")
        raise AuthenticationError("Invalid or expired token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency returning the authenticated, active user.

    Raises:
        AuthenticationError: missing, malformed or expired token, or unknown user
        AuthorizationError: the account has been disabled
    """
    if credentials is None:
        raise AuthenticationError("No token provided")

    payload = decode_access_token(credentials.credentials)

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        logger.warning("Token payload has no usable 'sub' claim")
        raise AuthenticationError("Invalid or expired token")

    result = await db.execute(
        select(User).options(selectinload(User.tutor_profile)).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if user is None:
        raise AuthenticationError("Invalid or expired token")
    if not user.is_active:
        raise AuthorizationError("Your account has been disabled")

    return user


def require_role(*roles: UserRole):
    """Dependency factory that admits only the given roles"""
    allowed = ", ".join(role.value for role in roles)

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise AuthorizationError(f"Only {allowed} can access this resource")
        return current_user

    return role_checker
