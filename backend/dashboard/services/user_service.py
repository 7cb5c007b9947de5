"""User management service."""

import logging
from typing import List, Optional

from pymongo.errors import DuplicateKeyError

from dashboard.auth.basic import Identity
from dashboard.auth.exceptions import AuthenticationError
from dashboard.auth.passwords import hash_password
from dashboard.auth.permissions import ensure_owner_or_admin
from dashboard.database.repositories import UserRepository
from dashboard.exceptions import ConflictError, NotFoundError
from dashboard.models.user import User, UserRole
from dashboard.schemas.user import (
    LoginModel,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email is already in use"


class UserService:
    """
    Registration, profile and credential management.

    Users may edit and delete only themselves; admins may act on anyone.
    Only admins can hand out roles.
    """

    async def list_users(self, users: UserRepository) -> List[User]:
        return await users.find_all()

    async def list_admins(self, users: UserRepository) -> List[User]:
        return await users.find_by_role(UserRole.ADMIN.value)

    async def get_user(self, users: UserRepository, user_id: str) -> User:
        user = await users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_current_user(self, users: UserRepository, identity: Identity) -> User:
        """The caller's own user document; 401 if it has since been deleted."""
        if not identity.user_id:
            raise AuthenticationError("User not authenticated")
        user = await users.find_by_id(identity.user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user

    async def register(
        self,
        users: UserRepository,
        request: UserCreateRequest,
        caller: Optional[Identity] = None,
    ) -> User:
        """
        Create a user with an Argon2id-hashed password.

        Raises:
            ConflictError: the email is already registered; the payload is
                the existing user
        """
        existing = await users.find_by_email(request.email)
        if existing is not None:
            raise self._already_registered(existing)

        role = UserRole.USER.value
        if request.role and caller is not None and caller.is_admin:
            role = request.role

        user = User(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            password_hash=hash_password(request.password),
            description=request.description,
            role=role,
        )
        try:
            await users.create(user)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            logger.warning(f"Duplicate registration for {request.email}")
            raise self._already_registered(await users.find_by_email(request.email))
        logger.info(f"Registered user {user.id} ({user.email}) with role {role}")
        return user

    async def update_user(
        self,
        users: UserRepository,
        user_id: str,
        request: UserUpdateRequest,
        identity: Identity,
    ) -> None:
        """Replace profile fields. The password hash is kept as is."""
        user = await self.get_user(users, user_id)
        ensure_owner_or_admin(identity, user.id, "update this user")

        if request.email != user.email:
            await self._ensure_email_free(users, request.email, user.id)

        user.email = request.email
        user.first_name = request.first_name
        user.last_name = request.last_name
        user.description = request.description
        if identity.is_admin and request.role:
            user.role = request.role

        await self._replace(users, user_id, user)

    async def delete_user(self, users: UserRepository, user_id: str, identity: Identity) -> None:
        user = await self.get_user(users, user_id)
        ensure_owner_or_admin(identity, user.id, "delete this user")
        await users.delete(user_id)
        logger.info(f"Deleted user {user_id}")

    async def update_security(
        self,
        users: UserRepository,
        user_id: str,
        login: LoginModel,
        identity: Identity,
    ) -> None:
        """Change a user's email and password together."""
        user = await self.get_user(users, user_id)
        ensure_owner_or_admin(identity, user.id, "update this user")

        if login.email != user.email:
            await self._ensure_email_free(users, login.email, user.id)

        user.email = login.email
        user.password_hash = hash_password(login.password)
        await self._replace(users, user_id, user)
        logger.info(f"Updated credentials for user {user_id}")

    async def _ensure_email_free(
        self, users: UserRepository, email: str, owner_id: Optional[str]
    ) -> None:
        other = await users.find_by_email(email)
        if other is not None and other.id != owner_id:
            raise ConflictError(EMAIL_IN_USE)

    async def _replace(self, users: UserRepository, user_id: str, user: User) -> None:
        """Replace the user; the unique email index turns a lost race into a 409."""
        try:
            await users.replace(user_id, user)
        except DuplicateKeyError:
            logger.warning(f"Email {user.email} was taken while updating user {user_id}")
            raise ConflictError(EMAIL_IN_USE)

    def _already_registered(self, existing: Optional[User]) -> ConflictError:
        payload = None
        if existing is not None:
            payload = UserResponse.model_validate(existing).model_dump(mode="json", by_alias=True)
        return ConflictError("User with this email already exists", payload=payload)


user_service = UserService()
