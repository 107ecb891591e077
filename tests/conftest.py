# tests/conftest.py
import os
import tempfile

import pytest

# Point the app at a throwaway database before anything imports it.
_TMP_DIR = tempfile.mkdtemp(prefix="device-tracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["SMTP_HOST"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.core.security import Role, create_access_token  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth(role: Role, name: str | None = None) -> dict[str, str]:
    token = create_access_token(name or f"{role.value}-user", role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers():
    return {role: auth(role) for role in Role}


def ticket_payload(**overrides) -> dict:
    payload = {
        "deviceId": "DEV-1",
        "complaintType": "Hardware",
        "description": "Screen flickers on boot",
        "priorityLevel": "High",
        "location": "Lab 3",
        "underWarranty": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_ticket(client):
    def _make(**overrides) -> dict:
        r = client.post("/tickets", json=ticket_payload(**overrides))
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def new_payload():
    return ticket_payload


@pytest.fixture
def auth_as():
    return auth
