"""
Typed failures raised by the authentication core.

Request handlers never see these directly: api.errors maps each family to a
status code and a deliberately coarse message.
"""


class AuthError(Exception):
    """Base class for every failure raised by the security package."""


# Credential / access-token problems -> "unauthenticated"
class AuthenticationError(AuthError):
    pass


class MissingCredentialError(AuthenticationError):
    pass


class MalformedCredentialError(AuthenticationError):
    pass


class InvalidTokenError(AuthenticationError):
    pass


class MismatchError(AuthError):
    """Password does not reproduce the stored hash."""


# Refresh-token problems -> "session invalid"
class InvalidSessionError(AuthError):
    reason = "invalid"


class NotFoundError(InvalidSessionError):
    reason = "not_found"


class ExpiredError(InvalidSessionError):
    reason = "expired"


class RevokedError(InvalidSessionError):
    reason = "revoked"


class ForbiddenError(AuthError):
    pass


class UnauthorizedError(AuthError):
    pass


# Collaborator / resource failures -> internal error
class InternalAuthError(AuthError):
    pass


class PersistenceError(InternalAuthError):
    pass


class HashingError(InternalAuthError):
    pass


class MalformedHashError(InternalAuthError):
    pass
