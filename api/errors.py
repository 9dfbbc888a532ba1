from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from security.errors import (
    AuthenticationError,
    ForbiddenError,
    InternalAuthError,
    InvalidSessionError,
    MismatchError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # Authentication core. Messages are coarser than the exception types on purpose:
    # clients never learn which check failed.
    @app.errorhandler(AuthenticationError)
    def handle_unauthenticated(err: AuthenticationError):
        logger.info("unauthenticated request: %s: %s", err.__class__.__name__, err)
        return error_response("UNAUTHENTICATED", "Missing or invalid credentials", 401)

    @app.errorhandler(MismatchError)
    def handle_mismatch(err: MismatchError):
        return error_response("INVALID_CREDENTIALS", "Incorrect email or password", 401)

    @app.errorhandler(InvalidSessionError)
    def handle_invalid_session(err: InvalidSessionError):
        logger.info("refresh token rejected: %s", err.reason)
        return error_response("SESSION_INVALID", "Session invalid", 401)

    @app.errorhandler(UnauthorizedError)
    def handle_unauthorized(err: UnauthorizedError):
        logger.warning("rejected api key: %s", err)
        return error_response("UNAUTHORIZED", "Invalid API key", 401)

    @app.errorhandler(ForbiddenError)
    def handle_forbidden(err: ForbiddenError):
        logger.info("forbidden: %s", err)
        return error_response("FORBIDDEN", "You are not allowed to perform this action", 403)

    @app.errorhandler(InternalAuthError)
    def handle_internal_auth(err: InternalAuthError):
        logger.exception("authentication backend failure", exc_info=err)
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500)

    # Marshmallow validation errors map to 422
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        return error_response("VALIDATION_ERROR", "Invalid input", 422, details=err.messages)

    # Integrity errors (unique constraints, FK violations)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        if current_app and current_app.debug:
            logger.exception("Integrity error", exc_info=err)
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        if "foreign key constraint" in lower_msg or "foreign key mismatch" in lower_msg:
            return error_response("BAD_REQUEST", "Foreign key constraint failed.", 400)
        return error_response("BAD_REQUEST", "Integrity error.", 400)

    # Werkzeug HTTPExceptions (abort(...)) map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 400
        return error_response(_HTTP_CODES.get(status, "HTTP_ERROR"), err.description, status)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
