"""
Test setup: point the app at a throwaway SQLite file before anything imports himaayah.config.
"""
import os
import tempfile
import uuid

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="himaayah-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DB_CONNECTION_LIMIT"] = "5"
os.environ.pop("DB_HOST", None)
os.environ.pop("ENV", None)

from fastapi.testclient import TestClient  # noqa: E402

from himaayah.database import SessionLocal, init_db  # noqa: E402
from himaayah.main import app  # noqa: E402


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@tests.example.com"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, role: str = "student", password: str = "testpass123", email: str | None = None) -> dict:
    """Register an account; return the JSON body ({token, user})."""
    r = client.post(
        "/auth/register",
        json={"name": f"Test {role}", "email": email or unique_email(role), "password": password, "role": role},
    )
    assert r.status_code == 201, r.text
    return r.json()


def student_id_for(client, account: dict) -> int:
    """Student profile id of a registered student account (read through /students as an admin)."""
    admin = register(client, "admin")
    r = client.get("/students", headers=auth_header(admin["token"]))
    assert r.status_code == 200, r.text
    matches = [s["id"] for s in r.json() if s["user_id"] == account["user"]["id"]]
    assert len(matches) == 1
    return matches[0]
