import os
import tempfile
from pathlib import Path

import pytest

# Force test config before importing app modules.
TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="chirpy-tests-")) / "chirpy_test.db"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_ENV"] = "testing"
os.environ.pop("PLATFORM", None)

from api import create_app  # noqa: E402
from models import storage  # noqa: E402

PASSWORD = "04234-correct-horse"


@pytest.fixture()
def app(tmp_path):
    storage.drop_all()
    storage.reload()
    app = create_app("testing")
    app.config["FILESERVER_ROOT"] = str(tmp_path)
    yield app
    storage.close()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(client):
    def _make(email="walt@example.com", password=PASSWORD):
        resp = client.post("/api/users", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _make


@pytest.fixture()
def login(client):
    def _login(email="walt@example.com", password=PASSWORD):
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
