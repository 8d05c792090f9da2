"""
Password hashing.

Passwords are stored as salted PBKDF2-SHA256 hashes. Every password change
bumps the credential version, which access tokens carry as a claim.
"""

import hashlib
import hmac
import logging
import secrets

from .exceptions import InvalidOperationError
from .models import Credentials
from .state import credentials

logger = logging.getLogger(__name__)

PASSWORD_ITERATIONS = 100_000
SALT_BYTES = 16
MIN_PASSWORD_LENGTH = 8


def hash_password(password: str, salt: bytes) -> str:
    derived = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PASSWORD_ITERATIONS)
    return derived.hex()


def set_password(user_id: int, password: str) -> Credentials:
    """
    Store a new password for a user.

    Returns:
        The stored credentials, with the version bumped if a password existed

    Raises:
        InvalidOperationError: If the password is too short
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidOperationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    salt = secrets.token_bytes(SALT_BYTES)
    previous = credentials.get(user_id)
    stored = Credentials(
        password_hash=hash_password(password, salt),
        salt=salt.hex(),
        version=previous.version + 1 if previous else 1,
    )
    credentials[user_id] = stored
    logger.debug("Password set for user %s (version %d)", user_id, stored.version)
    return stored


def check_password(user_id: int, password: str) -> bool:
    stored = credentials.get(user_id)
    if stored is None:
        return False
    candidate = hash_password(password, bytes.fromhex(stored.salt))
    return hmac.compare_digest(candidate, stored.password_hash)


def credential_version(user_id: int) -> int | None:
    stored = credentials.get(user_id)
    return stored.version if stored else None
