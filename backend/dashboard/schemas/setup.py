"""First-run setup and health Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dashboard.schemas.common import BaseSchema, EmailAddress


class FirstAdminRequest(BaseSchema):
    """
    First admin registration.

    Names and description are optional here; defaults are filled in by
    the setup service.
    """

    email: EmailAddress
    password: str = Field(..., min_length=6, max_length=100)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    description: Optional[str] = None


class FirstAdminResponse(BaseSchema):
    message: str
    user_id: str
    email: str
    role: str


class SetupStatusResponse(BaseSchema):
    status: str
    database_connected: bool
    users_count: int
    admin_user_exists: bool
    database_name: str


class HealthResponse(BaseSchema):
    status: str
    timestamp: datetime
    message: str
    environment: Optional[str] = None
