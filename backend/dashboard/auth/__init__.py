"""Basic authentication, Argon2id password hashing and authorization checks."""

from dashboard.auth.basic import (
    Identity,
    authenticate,
    get_current_identity,
    get_optional_identity,
    parse_basic_authorization,
    require_admin,
)
from dashboard.auth.exceptions import AuthenticationError
from dashboard.auth.passwords import (
    PasswordManager,
    get_password_manager,
    hash_password,
    needs_rehash,
    verify_password,
)
from dashboard.auth.permissions import (
    ensure_any_of_or_admin,
    ensure_owner_or_admin,
    is_owner_or_admin,
)

__all__ = [
    "AuthenticationError",
    "Identity",
    "PasswordManager",
    "authenticate",
    "ensure_any_of_or_admin",
    "ensure_owner_or_admin",
    "get_current_identity",
    "get_optional_identity",
    "get_password_manager",
    "hash_password",
    "is_owner_or_admin",
    "needs_rehash",
    "parse_basic_authorization",
    "require_admin",
    "verify_password",
]
