"""First-run setup: bootstrap the initial admin and report installation status."""

import logging
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError

from dashboard.auth.passwords import hash_password
from dashboard.database.repositories import UserRepository
from dashboard.exceptions import ConflictError
from dashboard.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_FIRST_NAME = "Admin"
DEFAULT_ADMIN_LAST_NAME = "User"
DEFAULT_ADMIN_DESCRIPTION = "Initial admin user"


class SetupService:
    """
    Creates the first user of an empty installation as Admin.

    Once any user exists, first-admin creation is refused with a conflict.
    """

    async def get_status(self, users: UserRepository, database_name: str) -> Dict[str, Any]:
        """Database reachability and user counts for the setup screen."""
        users_count = await users.count()
        admins = await users.count({"role": UserRole.ADMIN.value})
        return {
            "status": "online",
            "databaseConnected": True,
            "usersCount": users_count,
            "adminUserExists": admins > 0,
            "databaseName": database_name,
        }

    async def create_first_admin(
        self,
        users: UserRepository,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> User:
        """
        Create the initial Admin user.

        Raises:
            ConflictError: users already exist; payload carries the count
        """
        users_count = await users.count()
        if users_count > 0:
            raise ConflictError(
                "Users already exist in the system",
                payload={"message": "Users already exist in the system", "usersCount": users_count},
            )

        admin = User(
            email=email,
            first_name=first_name or DEFAULT_ADMIN_FIRST_NAME,
            last_name=last_name or DEFAULT_ADMIN_LAST_NAME,
            password_hash=hash_password(password),
            role=UserRole.ADMIN.value,
            description=description or DEFAULT_ADMIN_DESCRIPTION,
        )
        try:
            await users.create(admin)
        except DuplicateKeyError:
            raise ConflictError("User with this email already exists")
        logger.info(f"Created first admin user {admin.id} ({admin.email})")
        return admin


setup_service = SetupService()
