"""
Access tokens: short-lived HS256 JWTs created and checked with PyJWT.

Verification never trusts the algorithm named inside the token: anything
other than ALGORITHM is rejected before the signature is looked at.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Optional

import jwt

from security.clock import utcnow
from security.errors import InvalidTokenError

ALGORITHM = "HS256"
ISSUER = "chirpy"
DEFAULT_TTL = timedelta(hours=1)
MAX_TTL = timedelta(seconds=3600)

REQUIRED_CLAIMS = ["iss", "sub", "iat", "exp"]


def clamp_ttl(ttl: timedelta) -> timedelta:
    """Cap a configured lifetime at MAX_TTL."""
    return min(ttl, MAX_TTL)


def create_access_token(
    user_id: uuid.UUID,
    secret: str,
    ttl: timedelta = DEFAULT_TTL,
    now: Optional[datetime] = None,
) -> str:
    """Sign {iss, sub, iat, exp} for user_id and return the compact JWT."""
    issued_at = now or utcnow()
    payload = {
        "iss": ISSUER,
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_access_token(token: str, secret: str) -> uuid.UUID:
    """
    Check an access token and return the user id in its subject.
    Raises InvalidTokenError for a foreign algorithm, bad signature,
    malformed structure, expiry, wrong issuer or a non-UUID subject.
    """
    try:
        header = jwt.get_unverified_header(token)
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(f"malformed token: {exc}") from exc
    if header.get("alg") != ALGORITHM:
        raise InvalidTokenError("unexpected signing algorithm")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            issuer=ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("token expired") from exc
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(f"invalid token: {exc}") from exc

    try:
        return uuid.UUID(claims["sub"])
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidTokenError("subject is not a user id") from exc
