"""Unit tests for route policy evaluation (role gate and self-ownership)."""
import pytest

from himaayah.errors import ForbiddenError
from himaayah.services.policy import (
    ADMIN_ONLY,
    AUTHENTICATED,
    SELF_OR_STAFF,
    TEACHER_ONLY,
    Caller,
    RoutePolicy,
    authorize,
    passes_role_gate,
)

ADMIN = Caller(id=1, role="admin", email="a@tests.example.com")
TEACHER = Caller(id=2, role="teacher", email="t@tests.example.com")
STUDENT = Caller(id=3, role="student", email="s@tests.example.com")


def test_no_required_role_admits_everyone():
    for caller in (ADMIN, TEACHER, STUDENT):
        authorize(caller, AUTHENTICATED)


def test_teacher_gate():
    assert passes_role_gate(TEACHER, "teacher")
    assert passes_role_gate(ADMIN, "teacher")
    assert not passes_role_gate(STUDENT, "teacher")
    with pytest.raises(ForbiddenError):
        authorize(STUDENT, TEACHER_ONLY)


def test_admin_overrides_every_gate():
    authorize(ADMIN, TEACHER_ONLY)
    authorize(ADMIN, ADMIN_ONLY)
    authorize(ADMIN, RoutePolicy(required_role="student"))


def test_admin_gate_rejects_teacher():
    with pytest.raises(ForbiddenError):
        authorize(TEACHER, ADMIN_ONLY)


def test_student_gate_rejects_teacher():
    with pytest.raises(ForbiddenError):
        authorize(TEACHER, RoutePolicy(required_role="student"))


def test_owner_scoped_student_self():
    authorize(STUDENT, SELF_OR_STAFF, owner_user_id=STUDENT.id)


def test_owner_scoped_student_other():
    with pytest.raises(ForbiddenError):
        authorize(STUDENT, SELF_OR_STAFF, owner_user_id=99)
    with pytest.raises(ForbiddenError):
        authorize(STUDENT, SELF_OR_STAFF, owner_user_id=None)


def test_owner_scoped_staff_not_scoped():
    authorize(ADMIN, SELF_OR_STAFF, owner_user_id=99)
    authorize(TEACHER, SELF_OR_STAFF, owner_user_id=99)


def test_ownership_ignored_when_not_scoped():
    authorize(STUDENT, AUTHENTICATED, owner_user_id=99)
