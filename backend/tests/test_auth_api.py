"""
API tests for registration, login and /me.
Uses FastAPI TestClient against the SQLite file configured in conftest.
"""
from conftest import auth_header, register, unique_email

from himaayah.models.student import Student
from himaayah.models.user import User


def test_health_needs_no_token(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_register_returns_token_and_public_user(client):
    email = unique_email("new")
    r = client.post("/auth/register", json={"name": "Amina", "email": email, "password": "pw-123456"})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["token"]
    assert body["user"]["email"] == email
    assert body["user"]["role"] == "student"
    assert "password" not in body["user"] and "password_hash" not in body["user"]


def test_register_missing_fields(client):
    r = client.post("/auth/register", json={"email": unique_email(), "password": "pw-123456"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing fields"}


def test_register_unknown_role(client):
    r = client.post(
        "/auth/register",
        json={"name": "X", "email": unique_email(), "password": "pw-123456", "role": "principal"},
    )
    assert r.status_code == 400
    assert "role" in r.json()["error"]


def test_register_duplicate_email_conflicts_and_keeps_one_user(client, db):
    email = unique_email("dup")
    register(client, "teacher", email=email)
    r = client.post("/auth/register", json={"name": "Again", "email": email, "password": "pw-123456"})
    assert r.status_code == 409
    assert "error" in r.json()
    assert db.query(User).filter(User.email == email).count() == 1


def test_student_registration_creates_one_profile(client, db):
    account = register(client, "student")
    rows = db.query(Student).filter(Student.user_id == account["user"]["id"]).all()
    assert len(rows) == 1
    assert rows[0].student_number and rows[0].student_number.startswith("S")
    assert len(rows[0].student_number) == 7
    assert rows[0].class_level == "awwal"


def test_non_student_registration_creates_no_profile(client, db):
    for role in ("teacher", "admin"):
        account = register(client, role)
        assert db.query(Student).filter(Student.user_id == account["user"]["id"]).count() == 0


def test_student_numbers_are_unique(client, db):
    for _ in range(5):
        register(client, "student")
    numbers = [n for (n,) in db.query(Student.student_number).all()]
    assert len(numbers) == len(set(numbers))


def test_login_success(client):
    email = unique_email("login")
    register(client, "teacher", email=email, password="right-pass")
    r = client.post("/auth/login", json={"email": email, "password": "right-pass"})
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["role"] == "teacher"
    assert body["user"]["name"] == "Test teacher"
    me = client.get("/me", headers=auth_header(body["token"]))
    assert me.status_code == 200
    assert me.json()["email"] == email


def test_login_failures_are_indistinguishable(client):
    email = unique_email("login")
    register(client, "student", email=email, password="right-pass")
    wrong_password = client.post("/auth/login", json={"email": email, "password": "wrong-pass"})
    unknown_email = client.post("/auth/login", json={"email": unique_email("nobody"), "password": "right-pass"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_missing_fields(client):
    r = client.post("/auth/login", json={"email": unique_email()})
    assert r.status_code == 400


def test_me_requires_token(client):
    r = client.get("/me")
    assert r.status_code == 401
    assert r.json() == {"error": "Auth required"}


def test_me_rejects_bad_token(client):
    r = client.get("/me", headers=auth_header("not-a-jwt"))
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid token"}


def test_malformed_email_is_a_validation_error(client):
    r = client.post("/auth/register", json={"name": "X", "email": "not-an-email", "password": "pw-123456"})
    assert r.status_code == 400
    assert "email" in r.json()["error"]


def test_register_with_null_role_defaults_to_student(client, db):
    email = unique_email("nullrole")
    r = client.post("/auth/register", json={"name": "N", "email": email, "password": "pw-123456", "role": None})
    assert r.status_code == 201, r.text
    assert r.json()["user"]["role"] == "student"
    user = db.query(User).filter(User.email == email).one()
    assert db.query(Student).filter(Student.user_id == user.id).count() == 1
