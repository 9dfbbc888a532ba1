import base64
import json
import uuid
from datetime import timedelta

import jwt
import pytest

from security.clock import utcnow
from security.errors import InvalidTokenError
from security.tokens import (
    ISSUER,
    MAX_TTL,
    clamp_ttl,
    create_access_token,
    verify_access_token,
)

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"
OTHER_SECRET = "another-unit-test-secret-long-enough-for-hs256"


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _claims(sub=None, **overrides):
    now = utcnow()
    claims = {
        "iss": ISSUER,
        "sub": sub or str(uuid.uuid4()),
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=5)).timestamp()),
    }
    claims.update(overrides)
    return claims


@pytest.mark.parametrize("user_id", [uuid.uuid4() for _ in range(5)])
def test_round_trip(user_id):
    token = create_access_token(user_id, SECRET, timedelta(minutes=1))
    assert verify_access_token(token, SECRET) == user_id


def test_wire_format_and_claims():
    user_id = uuid.uuid4()
    token = create_access_token(user_id, SECRET)
    assert token.count(".") == 2
    assert jwt.get_unverified_header(token)["alg"] == "HS256"

    claims = jwt.decode(token, options={"verify_signature": False})
    assert claims["iss"] == "chirpy"
    assert claims["sub"] == str(user_id)
    assert claims["exp"] - claims["iat"] == 3600


def test_negative_ttl_is_rejected():
    token = create_access_token(uuid.uuid4(), SECRET, timedelta(minutes=-1))
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_token_issued_in_the_past_has_elapsed():
    token = create_access_token(
        uuid.uuid4(), SECRET, timedelta(hours=1), now=utcnow() - timedelta(hours=2)
    )
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_wrong_secret_is_rejected():
    token = create_access_token(uuid.uuid4(), SECRET)
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, OTHER_SECRET)


def test_other_hmac_algorithm_is_rejected():
    token = jwt.encode(_claims(), SECRET, algorithm="HS512")
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_unsigned_token_is_rejected():
    token = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64(_claims())}."
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_tampered_payload_is_rejected():
    token = create_access_token(uuid.uuid4(), SECRET)
    header, _, signature = token.split(".")
    forged = f"{header}.{_b64(_claims())}.{signature}"
    with pytest.raises(InvalidTokenError):
        verify_access_token(forged, SECRET)


@pytest.mark.parametrize("token", ["", "abc", "a.b.c", "....", "Bearer x.y.z"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


@pytest.mark.parametrize("sub", ["not-a-uuid", "12345", "admin"])
def test_subject_must_be_a_user_id(sub):
    token = jwt.encode(_claims(sub=sub), SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_wrong_issuer_is_rejected():
    token = jwt.encode(_claims(iss="someone-else"), SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_missing_expiry_is_rejected():
    claims = _claims()
    del claims["exp"]
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        verify_access_token(token, SECRET)


def test_clamp_ttl():
    assert clamp_ttl(timedelta(hours=5)) == MAX_TTL
    assert clamp_ttl(timedelta(minutes=10)) == timedelta(minutes=10)
