import uuid

import pytest

from security.errors import ForbiddenError, UnauthorizedError
from security.guards import require_admin_platform, require_api_key, require_owner


def test_require_owner_accepts_the_owner():
    owner = uuid.uuid4()
    require_owner(owner, owner)
    require_owner(str(owner), owner)


@pytest.mark.parametrize("owner", [uuid.uuid4(), "not-a-uuid", ""])
def test_require_owner_rejects_others(owner):
    with pytest.raises(ForbiddenError):
        require_owner(owner, uuid.uuid4())


def test_require_admin_platform():
    require_admin_platform("dev")
    for platform in ("prod", "DEV", "", None):
        with pytest.raises(ForbiddenError):
            require_admin_platform(platform)


def test_require_api_key():
    require_api_key("secret-key", "secret-key")
    with pytest.raises(UnauthorizedError):
        require_api_key("secret-kez", "secret-key")
    with pytest.raises(UnauthorizedError):
        require_api_key("", "")
    with pytest.raises(UnauthorizedError):
        require_api_key("secret-key", None)
