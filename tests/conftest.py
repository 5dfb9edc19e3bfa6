# tests/conftest.py
import os
import tempfile

# Required settings must exist before hotel_ops is imported
_TMP_DIR = tempfile.mkdtemp(prefix="hotel_ops_tests_")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["VIEW_PIN"] = "47123"
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "import.db")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hotel_ops.auth import create_access_token, get_password_hash
from hotel_ops.database import Base, build_engine, get_db
from hotel_ops.main import app
from hotel_ops.models.user import User, UserRole

PIN = os.environ["VIEW_PIN"]


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make_user(username, password="secret123", role=UserRole.STAFF):
        user = User(
            username=username,
            hashed_password=get_password_hash(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture()
def admin_user(make_user):
    return make_user("admin", role=UserRole.ADMIN)


@pytest.fixture()
def staff_user(make_user):
    return make_user("awed", role=UserRole.STAFF)


def bearer(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture()
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture()
def staff_headers(staff_user):
    return bearer(staff_user)


@pytest.fixture()
def pin_headers():
    return {"X-View-Pin": PIN}


@pytest.fixture()
def room(client, staff_headers):
    resp = client.post("/api/rooms", json={"number": "101", "type": "Standard"}, headers=staff_headers)
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture()
def title(client, staff_headers, room):
    resp = client.post(f"/api/rooms/{room['id']}/titles", json={"title": "Plumbing"}, headers=staff_headers)
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture()
def headers_for():
    return bearer
