"""
Refresh tokens: opaque 256-bit values persisted through a store.

A token is usable only while it is neither expired nor revoked; both of
those states are permanent. Every read and write goes straight to the
store, so no state is cached in-process.
"""
from __future__ import annotations

import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol, Tuple

from security.clock import utcnow
from security.errors import ExpiredError, NotFoundError, RevokedError

TOKEN_BYTES = 32
DEFAULT_TTL = timedelta(days=60)


@dataclass(frozen=True)
class RefreshTokenRecord:
    token: str
    user_id: uuid.UUID
    expires_at: datetime
    revoked_at: Optional[datetime] = None


class RefreshTokenStore(Protocol):
    """What the manager needs from persistence. Implemented by models.db_storage.DBStorage."""

    def store_refresh_token(self, token: str, user_id: uuid.UUID, expires_at: datetime) -> None:
        ...

    def lookup_refresh_token(self, token: str) -> Optional[RefreshTokenRecord]:
        ...

    def mark_refresh_token_revoked(self, token: str, now: datetime) -> Optional[bool]:
        """
        Set revoked_at if still unset, atomically per record.
        True when this call revoked it, False when it was already revoked,
        None when no such token exists.
        """
        ...


def generate_refresh_token() -> str:
    """32 random bytes as 64 lowercase hex characters."""
    return secrets.token_hex(TOKEN_BYTES)


class RefreshTokenManager:
    def __init__(
        self,
        store: RefreshTokenStore,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.ttl = ttl
        self.clock = clock

    def issue(self, user_id: uuid.UUID) -> Tuple[str, datetime]:
        """
        Create and persist a new refresh token for user_id.
        A store failure (including a value collision) propagates as
        PersistenceError; retrying is up to the caller.
        """
        token = generate_refresh_token()
        expires_at = self.clock() + self.ttl
        self.store.store_refresh_token(token, user_id, expires_at)
        return token, expires_at

    def resolve(self, token: str) -> uuid.UUID:
        """Return the owning user id of an active token."""
        record = self.store.lookup_refresh_token(token)
        if record is None:
            raise NotFoundError("refresh token not found")
        if record.revoked_at is not None:
            raise RevokedError("refresh token revoked")
        if self.clock() > record.expires_at:
            raise ExpiredError("refresh token expired")
        return record.user_id

    def revoke(self, token: str) -> None:
        """Revoke a token. Revoking an already revoked token succeeds."""
        if self.store.mark_refresh_token_revoked(token, self.clock()) is None:
            raise NotFoundError("refresh token not found")

    def rotate(self, token: str) -> Tuple[uuid.UUID, str, datetime]:
        """
        Resolve token, revoke it and issue a replacement for the same user.
        Only the call that actually flips the token to revoked gets a
        replacement; a concurrent rotation of the same token fails.
        """
        user_id = self.resolve(token)
        revoked_now = self.store.mark_refresh_token_revoked(token, self.clock())
        if revoked_now is None:
            raise NotFoundError("refresh token not found")
        if not revoked_now:
            raise RevokedError("refresh token already rotated")
        new_token, expires_at = self.issue(user_id)
        return user_id, new_token, expires_at
