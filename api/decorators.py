from __future__ import annotations
from functools import wraps
from flask import request, g, current_app

from models import storage
from models.user import User
from security.credentials import extract_api_key, extract_bearer
from security.errors import InvalidTokenError
from security.guards import require_admin_platform, require_api_key
from security.tokens import verify_access_token


def jwt_required():
    """
    Require a valid access token. Sets g.current_user and g.current_user_id.
    Failures raise security errors, which api.errors turns into a 401.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = extract_bearer(request.headers)
            user_id = verify_access_token(token, current_app.config["JWT_SECRET"])
            user = storage.get(User, str(user_id))
            if not user:
                raise InvalidTokenError("token subject does not exist")
            g.current_user = user
            g.current_user_id = user_id
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required(config_key: str = "POLKA_KEY"):
    """Require `Authorization: ApiKey <key>` matching app.config[config_key]."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            require_api_key(extract_api_key(request.headers), current_app.config.get(config_key))
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def admin_platform_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            require_admin_platform(current_app.config.get("PLATFORM"))
            return fn(*args, **kwargs)

        return wrapper

    return decorator
