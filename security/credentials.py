"""Pull credentials out of the Authorization header. No I/O."""
from __future__ import annotations

from typing import Mapping

from security.errors import MalformedCredentialError, MissingCredentialError

AUTHORIZATION = "Authorization"
BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "


def _extract(headers: Mapping[str, str], prefix: str) -> str:
    value = headers.get(AUTHORIZATION)
    if not value:
        raise MissingCredentialError("authorization header not found")
    if not value.startswith(prefix):
        raise MalformedCredentialError(f"authorization header is not in {prefix.strip()} format")
    credential = value[len(prefix):].strip()
    if not credential:
        raise MalformedCredentialError("authorization header carries no credential")
    return credential


def extract_bearer(headers: Mapping[str, str]) -> str:
    """Token from `Authorization: Bearer <token>` (prefix is case-sensitive)."""
    return _extract(headers, BEARER_PREFIX)


def extract_api_key(headers: Mapping[str, str]) -> str:
    """Key from `Authorization: ApiKey <key>`."""
    return _extract(headers, API_KEY_PREFIX)
