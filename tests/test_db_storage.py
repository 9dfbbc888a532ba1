import uuid
from datetime import timedelta
from pathlib import Path

import pytest

from models import storage
from models.refresh_token import RefreshToken
from models.user import User
from security.clock import utcnow
from security.errors import PersistenceError, RevokedError
from security.refresh import RefreshTokenManager


@pytest.fixture()
def user_id(app):
    user = User(email="store@example.com", hashed_password="not-a-real-hash")
    storage.new(user)
    storage.save()
    return uuid.UUID(user.id)


def test_store_and_lookup(user_id):
    expires_at = utcnow() + timedelta(days=60)
    storage.store_refresh_token("a" * 64, user_id, expires_at)

    record = storage.lookup_refresh_token("a" * 64)
    assert record.user_id == user_id
    assert record.expires_at == expires_at
    assert record.expires_at.tzinfo is not None
    assert record.revoked_at is None


def test_lookup_missing(app):
    assert storage.lookup_refresh_token("b" * 64) is None


def test_duplicate_token_is_a_persistence_error(user_id):
    storage.store_refresh_token("c" * 64, user_id, utcnow())
    with pytest.raises(PersistenceError):
        storage.store_refresh_token("c" * 64, user_id, utcnow())


def test_unknown_user_is_a_persistence_error(app):
    with pytest.raises(PersistenceError):
        storage.store_refresh_token("d" * 64, uuid.uuid4(), utcnow())


def test_mark_revoked_keeps_the_first_timestamp(user_id):
    storage.store_refresh_token("e" * 64, user_id, utcnow() + timedelta(days=1))
    first = utcnow()

    assert storage.mark_refresh_token_revoked("e" * 64, first) is True
    assert storage.mark_refresh_token_revoked("e" * 64, first + timedelta(hours=1)) is False
    assert storage.lookup_refresh_token("e" * 64).revoked_at == first


def test_mark_revoked_unknown(app):
    assert storage.mark_refresh_token_revoked("f" * 64, utcnow()) is None


def test_manager_against_the_database(user_id):
    manager = RefreshTokenManager(storage)
    token, _ = manager.issue(user_id)
    assert manager.resolve(token) == user_id
    manager.revoke(token)
    with pytest.raises(RevokedError):
        manager.resolve(token)


def test_purge_removes_only_dead_tokens(user_id):
    now = utcnow()
    storage.store_refresh_token("1" * 64, user_id, now + timedelta(days=1))
    storage.store_refresh_token("2" * 64, user_id, now - timedelta(days=1))
    storage.store_refresh_token("3" * 64, user_id, now + timedelta(days=1))
    storage.mark_refresh_token_revoked("3" * 64, now)

    assert storage.purge_refresh_tokens(now) == 2
    assert storage.lookup_refresh_token("1" * 64) is not None
    assert storage.lookup_refresh_token("2" * 64) is None
    assert storage.lookup_refresh_token("3" * 64) is None


def test_deleting_users_cascades_to_tokens(user_id):
    storage.store_refresh_token("9" * 64, user_id, utcnow() + timedelta(days=1))
    assert storage.delete_all(User) == 1
    assert storage.count(RefreshToken) == 0


def test_each_run_gets_its_own_database(app):
    from conftest import TEST_DB_PATH

    assert TEST_DB_PATH.parent.name.startswith("chirpy-tests-")
    bound = storage.get_session().get_bind().url.database
    assert Path(bound) == TEST_DB_PATH
