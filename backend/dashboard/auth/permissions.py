"""Owner-or-admin authorization checks shared by the services."""

from typing import Iterable, Optional

from dashboard.auth.basic import Identity
from dashboard.exceptions import PermissionDeniedError


def is_owner_or_admin(identity: Identity, owner_id: Optional[str]) -> bool:
    return identity.is_admin or (owner_id is not None and owner_id == identity.user_id)


def ensure_owner_or_admin(identity: Identity, owner_id: Optional[str], action: str) -> None:
    """
    Allow the resource owner and admins, refuse everyone else.

    Raises:
        PermissionDeniedError: caller neither owns the resource nor is Admin
    """
    if not is_owner_or_admin(identity, owner_id):
        raise PermissionDeniedError(f"Not authorized to {action}")


def ensure_any_of_or_admin(
    identity: Identity,
    allowed_user_ids: Iterable[Optional[str]],
    action: str,
) -> None:
    """Like ensure_owner_or_admin, but any of several users may act."""
    if identity.is_admin:
        return
    if identity.user_id in {user_id for user_id in allowed_user_ids if user_id}:
        return
    raise PermissionDeniedError(f"Not authorized to {action}")
