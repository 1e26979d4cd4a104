from pydantic import EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from skillbridge.core import constants
from skillbridge.models.user import UserRole
from skillbridge.schemas.common import CamelModel
from skillbridge.schemas.tutor import TutorProfileResponse


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=constants.NAME_MIN_LENGTH, max_length=constants.NAME_MAX_LENGTH, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=constants.PASSWORD_MIN_LENGTH, max_length=constants.PASSWORD_MAX_LENGTH, description="Plain password")
    phone: Optional[str] = Field(None, max_length=constants.PHONE_MAX_LENGTH, description="Phone number")
    role: UserRole = Field(..., description="STUDENT, TUTOR or ADMIN")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < constants.NAME_MIN_LENGTH:
            raise ValueError(f"Name must be at least {constants.NAME_MIN_LENGTH} characters")
        return value

    @field_validator("email")
    @classmethod
    def check_email_length(cls, value: str) -> str:
        if len(value) > constants.EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must be at most {constants.EMAIL_MAX_LENGTH} characters")
        return value


class LoginRequest(CamelModel):
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, description="Plain password")


class UserSummary(CamelModel):
    id: uuid.UUID = Field(..., description="User ID")
    name: str = Field(..., description="User name")
    email: Optional[str] = Field(None, description="User email")


class UserResponse(CamelModel):
    id: uuid.UUID = Field(..., description="User ID")
    name: str = Field(..., description="User name")
    email: str = Field(..., description="User email")
    phone: Optional[str] = Field(None, description="Phone number")
    role: UserRole = Field(..., description="User role")
    is_active: bool = Field(..., description="Whether the account can sign in")
    created_at: datetime = Field(..., description="Creation time")
    tutor_profile: Optional[TutorProfileResponse] = Field(None, description="Tutor profile for TUTOR users")


class AuthResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    user: UserResponse = Field(..., description="Authenticated user")
    token: str = Field(..., description="Bearer access token")


class MeResponse(CamelModel):
    user: UserResponse = Field(..., description="Current user")


class UserStatusUpdate(CamelModel):
    is_active: bool = Field(..., description="Enable or disable the account")


class UserUpdateResponse(CamelModel):
    message: str = Field(..., description="Outcome")
    user: UserResponse = Field(..., description="Updated user")
