"""User Pydantic schemas."""

from typing import Optional

from pydantic import Field

from dashboard.models.user import UserRole
from dashboard.schemas.common import BaseSchema, EmailAddress, TimestampSchema


class UserRegistrationRequest(BaseSchema):
    """Self-service registration and first-admin setup."""

    email: EmailAddress
    password: str = Field(..., min_length=6, max_length=100)
    first_name: str
    last_name: str
    description: Optional[str] = None


class UserCreateRequest(UserRegistrationRequest):
    """Registration through POST /api/users; ``role`` is honoured only for admins."""

    role: Optional[UserRole] = None


class UserUpdateRequest(BaseSchema):
    """Full replacement of a user's profile fields."""

    email: EmailAddress
    first_name: str
    last_name: str
    description: Optional[str] = None
    role: Optional[UserRole] = None


class LoginModel(BaseSchema):
    """New email/password pair for PATCH /api/users/{id}/security."""

    email: EmailAddress
    password: str = Field(..., min_length=1)


class UserResponse(TimestampSchema):
    """User as returned by the API. The password hash never leaves the server."""

    id: str
    email: str
    first_name: str
    last_name: str
    description: Optional[str] = None
    role: Optional[str] = None
