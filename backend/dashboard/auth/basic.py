"""
HTTP Basic authentication.

Every protected request carries ``Authorization: Basic base64(email:password)``.
The handler decodes the header, looks the user up by email, verifies the
Argon2id hash and builds an Identity carrying the user id, email and role.

FastAPI dependencies:
- get_current_identity: 401 unless valid credentials are present
- get_optional_identity: None without a header, 401 for a bad one
- require_admin: 403 unless the identity has the Admin role
"""

import asyncio
import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Depends, Request

from dashboard.auth.exceptions import AuthenticationError
from dashboard.auth.passwords import PasswordManager, get_password_manager
from dashboard.database.dependencies import get_user_repository
from dashboard.database.repositories import UserRepository
from dashboard.exceptions import PermissionDeniedError
from dashboard.models.user import UserRole

logger = logging.getLogger(__name__)

SCHEME_PREFIX = "Basic "

MISSING_HEADER = "Missing Authorization Header"
INVALID_HEADER = "Invalid Authorization Header"
INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class Identity:
    """Claims of an authenticated request."""

    user_id: str
    email: str
    role: str = UserRole.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def parse_basic_authorization(header: Optional[str]) -> Tuple[str, str]:
    """
    Decode a Basic Authorization header into (email, password).

    The decoded credentials must split on ``:`` into exactly two parts,
    so passwords containing a colon are rejected.

    Raises:
        AuthenticationError: header missing, wrong scheme or undecodable
    """
    if not header:
        raise AuthenticationError(MISSING_HEADER)

    if not header.startswith(SCHEME_PREFIX):
        raise AuthenticationError(INVALID_HEADER)

    token = header[len(SCHEME_PREFIX):].strip()
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise AuthenticationError(INVALID_HEADER)

    credentials = decoded.split(":")
    if len(credentials) != 2:
        raise AuthenticationError(INVALID_HEADER)

    email, password = credentials
    return email, password


async def authenticate(
    header: Optional[str],
    users: UserRepository,
    passwords: Optional[PasswordManager] = None,
) -> Identity:
    """
    Resolve a Basic Authorization header to an Identity.

    A successful login against a hash with outdated parameters (including
    the legacy ``salt:hash`` format) stores a fresh hash for the user.

    Raises:
        AuthenticationError: header invalid, unknown email or wrong password
    """
    passwords = passwords or get_password_manager()
    email, password = parse_basic_authorization(header)

    user = await users.find_by_email(email)
    if user is None:
        logger.warning(f"Authentication failed: unknown email {email}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    # Argon2 is memory-hard; keep it off the event loop
    verified = await asyncio.to_thread(passwords.verify_password, password, user.password_hash)
    if not verified:
        logger.warning(f"Authentication failed: wrong password for {email}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if passwords.needs_rehash(user.password_hash):
        user.password_hash = await asyncio.to_thread(passwords.hash_password, password)
        await users.replace(user.id, user)
        logger.info(f"Upgraded password hash for user {user.id}")

    return Identity(user_id=user.id or "", email=user.email, role=user.effective_role)


async def get_current_identity(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
) -> Identity:
    """FastAPI dependency: the authenticated caller, or 401."""
    return await authenticate(request.headers.get("Authorization"), users)


async def get_optional_identity(
    request: Request,
    users: UserRepository = Depends(get_user_repository),
) -> Optional[Identity]:
    """FastAPI dependency: the caller if credentials were sent, else None."""
    header = request.headers.get("Authorization")
    if not header:
        return None
    return await authenticate(header, users)


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """FastAPI dependency: the caller, who must hold the Admin role."""
    if not identity.is_admin:
        raise PermissionDeniedError("Admin role required")
    return identity
