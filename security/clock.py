from datetime import datetime, timezone


def utcnow() -> datetime:
    """The one clock every expiry comparison in the service reads."""
    return datetime.now(timezone.utc)
