from __future__ import annotations

import hmac
import uuid
from typing import Optional, Union

from security.errors import ForbiddenError, UnauthorizedError

ADMIN_PLATFORM = "dev"

UserId = Union[uuid.UUID, str]


def _as_uuid(value: UserId) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def require_owner(resource_owner_id: UserId, caller_id: UserId) -> None:
    """The authenticated caller must be the recorded owner of the resource."""
    owner = _as_uuid(resource_owner_id)
    if owner is None or owner != _as_uuid(caller_id):
        raise ForbiddenError("caller does not own this resource")


def require_admin_platform(platform: Optional[str], allowed: str = ADMIN_PLATFORM) -> None:
    """Destructive admin operations only run on the designated non-production platform."""
    if platform != allowed:
        raise ForbiddenError(f"operation not allowed on platform {platform!r}")


def require_api_key(provided: Optional[str], configured: Optional[str]) -> None:
    """Exact match against the pre-shared server-to-server key."""
    if not provided or not configured:
        raise UnauthorizedError("api key missing")
    if not hmac.compare_digest(provided.encode(), configured.encode()):
        raise UnauthorizedError("api key does not match")
