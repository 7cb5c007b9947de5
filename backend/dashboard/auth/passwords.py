"""
Argon2id password hashing.

New hashes are PHC strings produced by argon2-cffi:

    $argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>

Accounts created before the switch store ``base64(salt):base64(hash)``
(Argon2id, 16-byte raw hash, parallelism 8, 4 iterations, 1 GiB memory).
Those still verify, and report ``needs_rehash`` so a successful login can
upgrade them.

Usage:
    manager = get_password_manager()
    stored = manager.hash_password("user_password")
    manager.verify_password("user_password", stored)  # True
"""

import base64
import binascii
import hmac
import logging
from functools import lru_cache
from typing import Optional, Tuple

from argon2 import PasswordHasher, Type
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)
from argon2.low_level import hash_secret_raw

from dashboard.config import PasswordConfig, get_settings

logger = logging.getLogger(__name__)

LEGACY_TIME_COST = 4
LEGACY_MEMORY_COST = 1024 * 1024  # KiB
LEGACY_PARALLELISM = 8
LEGACY_HASH_LEN = 16


def _split_legacy_hash(password_hash: str) -> Optional[Tuple[bytes, bytes]]:
    """Decode ``salt:hash`` into raw bytes, or None if it is not that format."""
    parts = password_hash.split(":")
    if len(parts) != 2:
        return None
    try:
        salt = base64.b64decode(parts[0], validate=True)
        digest = base64.b64decode(parts[1], validate=True)
    except (binascii.Error, ValueError):
        return None
    if not salt or not digest:
        return None
    return salt, digest


def is_legacy_hash(password_hash: str) -> bool:
    return not password_hash.startswith("$") and _split_legacy_hash(password_hash) is not None


class PasswordManager:
    """
    Argon2id hashing with configurable cost.

    Security features:
    - Argon2id variant (hybrid data-independent + data-dependent)
    - Random per-password salt
    - Constant-time comparison for both PHC and legacy hashes
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
        hash_len: int = 32,
        salt_len: int = 16,
    ):
        self.password_hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=hash_len,
            salt_len=salt_len,
            type=Type.ID,
        )

    @classmethod
    def from_config(cls, config: PasswordConfig) -> "PasswordManager":
        return cls(
            time_cost=config.time_cost,
            memory_cost=config.memory_cost,
            parallelism=config.parallelism,
            hash_len=config.hash_len,
            salt_len=config.salt_len,
        )

    def hash_password(self, password: str) -> str:
        """
        Hash password using Argon2id.

        Args:
            password: Plain text password

        Returns:
            PHC-format hash string (algorithm, parameters, salt and hash)
        """
        if not password:
            raise ValueError("Password cannot be empty")
        return self.password_hasher.hash(password)

    def verify_password(self, password: str, password_hash: str) -> bool:
        """
        Verify a password against a stored hash.

        Returns False on mismatch and on hashes that cannot be parsed.
        """
        if not password or not password_hash:
            return False

        if is_legacy_hash(password_hash):
            return self._verify_legacy(password, password_hash)

        try:
            return self.password_hasher.verify(password_hash, password)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError) as e:
            logger.warning(f"Unverifiable password hash: {e}")
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check whether a stored hash should be replaced with a fresh one."""
        if is_legacy_hash(password_hash):
            return True
        try:
            return self.password_hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, ValueError):
            return True

    @staticmethod
    def _verify_legacy(password: str, password_hash: str) -> bool:
        decoded = _split_legacy_hash(password_hash)
        if decoded is None:
            return False
        salt, expected = decoded
        try:
            actual = hash_secret_raw(
                secret=password.encode("utf-8"),
                salt=salt,
                time_cost=LEGACY_TIME_COST,
                memory_cost=LEGACY_MEMORY_COST,
                parallelism=LEGACY_PARALLELISM,
                hash_len=LEGACY_HASH_LEN,
                type=Type.ID,
            )
        except HashingError as e:
            logger.warning(f"Unverifiable legacy password hash: {e}")
            return False
        return hmac.compare_digest(actual, expected)


@lru_cache()
def get_password_manager() -> PasswordManager:
    """Get the PasswordManager configured from settings."""
    return PasswordManager.from_config(get_settings().passwords)


def hash_password(password: str) -> str:
    return get_password_manager().hash_password(password)


def verify_password(password: str, password_hash: str) -> bool:
    return get_password_manager().verify_password(password, password_hash)


def needs_rehash(password_hash: str) -> bool:
    return get_password_manager().needs_rehash(password_hash)
