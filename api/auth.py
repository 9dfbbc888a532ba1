"""
Session blueprint:
- POST /login    -> access token + refresh token
- POST /refresh  -> new access token (Bearer <refresh token>)
- POST /revoke   -> revoke a refresh token (Bearer <refresh token>)

Access tokens are HS256 JWTs valid for ACCESS_TOKEN_TTL (at most 1h).
Refresh tokens are opaque and stored in the refresh_tokens table so they can be revoked.
"""
from __future__ import annotations

import logging
import uuid

from flask import Blueprint, request, jsonify, current_app

from models import storage
from models.schemas.user import UserLoginSchema, UserOutSchema
from security.credentials import extract_bearer
from security.passwords import burn_verify, hash_password, needs_rehash, verify_password
from security.refresh import RefreshTokenManager
from security.tokens import create_access_token

logger = logging.getLogger(__name__)

EXTENSION_KEY = "chirpy_refresh_tokens"

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


def get_refresh_manager() -> RefreshTokenManager:
    return current_app.extensions[EXTENSION_KEY]


def issue_access_token(user_id: uuid.UUID) -> str:
    return create_access_token(
        user_id, current_app.config["JWT_SECRET"], current_app.config["ACCESS_TOKEN_TTL"]
    )


@bp.post("/login")
def login():
    """
    Login: returns the user plus access token and refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Incorrect email or password
    """
    data = user_login_schema.load(request.get_json(silent=True) or {})

    user = storage.get_user_by_email(data["email"])
    if user is None:
        burn_verify(data["password"])
    verify_password(data["password"], user.hashed_password)

    if needs_rehash(user.hashed_password):
        user.hashed_password = hash_password(data["password"])
        storage.new(user)
        storage.save()

    user_id = uuid.UUID(user.id)
    access_token = issue_access_token(user_id)
    refresh_token, _ = get_refresh_manager().issue(user_id)
    logger.info("user %s logged in", user.id)

    body = user_out_schema.dump(user)
    body["token"] = access_token
    body["refresh_token"] = refresh_token
    return jsonify(body), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns token, plus refresh_token when rotation is enabled)
      401:
        description: Session invalid
    """
    presented = extract_bearer(request.headers)
    manager = get_refresh_manager()

    if current_app.config.get("REFRESH_TOKEN_ROTATION"):
        user_id, new_refresh, _ = manager.rotate(presented)
        return jsonify({"token": issue_access_token(user_id), "refresh_token": new_refresh}), 200

    user_id = manager.resolve(presented)
    return jsonify({"token": issue_access_token(user_id)}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token (idempotent)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      401:
        description: Session invalid
    """
    get_refresh_manager().revoke(extract_bearer(request.headers))
    return ("", 204)
