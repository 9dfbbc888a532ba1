"""
Password hashing via argon2-cffi.

Cost parameters are fixed module constants: high enough to make offline
guessing expensive, low enough to keep a single verify well under 200ms.
"""
from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError as Argon2HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from security.errors import HashingError, MalformedHashError, MismatchError

TIME_COST = 3
MEMORY_COST = 64 * 1024  # KiB
PARALLELISM = 4

ph = PasswordHasher(time_cost=TIME_COST, memory_cost=MEMORY_COST, parallelism=PARALLELISM)

# Verified against when the email is unknown so both login failures cost the same.
_DUMMY_HASH = ph.hash("chirpy-dummy-password")


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2 (random salt per call)."""
    try:
        return ph.hash(password)
    except Argon2HashingError as exc:
        raise HashingError("could not hash password") from exc


def verify_password(password: str, password_hash: str) -> None:
    """
    Verify a plaintext password against a stored hash.
    Raises MismatchError or MalformedHashError; returns None on success.
    """
    try:
        ph.verify(password_hash, password)
    except VerifyMismatchError as exc:
        raise MismatchError("password does not match") from exc
    except InvalidHashError as exc:
        raise MalformedHashError("stored hash is not an argon2 hash") from exc
    except VerificationError as exc:
        raise MalformedHashError(f"stored hash could not be decoded: {exc}") from exc


def burn_verify(password: str) -> None:
    """Spend one verify's worth of time and report a mismatch."""
    try:
        ph.verify(_DUMMY_HASH, password)
    except VerifyMismatchError:
        pass
    raise MismatchError("password does not match")


def needs_rehash(password_hash: str) -> bool:
    return ph.check_needs_rehash(password_hash)
