"""User document model for the 'users' collection."""

from enum import Enum
from typing import Optional

from dashboard.models.base import MongoModel


class UserRole(str, Enum):
    """Role claim carried by an authenticated identity."""

    ADMIN = "Admin"
    USER = "User"


class User(MongoModel):
    """
    Registered dashboard user.

    ``role`` may be missing on older documents; it is treated as
    ``User`` everywhere a role is checked.
    """

    email: str
    first_name: str
    last_name: str
    password_hash: str
    description: Optional[str] = None
    role: Optional[str] = UserRole.USER.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def effective_role(self) -> str:
        return self.role or UserRole.USER.value

    @property
    def is_admin(self) -> bool:
        return self.effective_role == UserRole.ADMIN.value
