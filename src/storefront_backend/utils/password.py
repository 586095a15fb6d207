"""
Argon2id password hashes.

The hasher runs with argon2-cffi's RFC 9106 low-memory profile. Hashes made
with other parameters still verify, and `needs_rehash` reports them so login
can upgrade them.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.profiles import RFC_9106_LOW_MEMORY

_hasher = PasswordHasher.from_parameters(RFC_9106_LOW_MEMORY)


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """False for a wrong password, an empty value or anything that is not an Argon2 hash."""
    if not (password and hashed):
        return False
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    return _hasher.check_needs_rehash(hashed)


def is_argon2_hash(value: str) -> bool:
    return bool(value) and value.startswith("$argon2")
