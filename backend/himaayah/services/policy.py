"""
Route authorization policy. Each route declares one RoutePolicy; authorize() is the single place
the role gate and the self-ownership check are evaluated.

Role gate: caller passes when caller.role equals the required role, or caller is admin.
Ownership: on owner-scoped routes a student caller must own the target row; admin and teacher
are not scoped (teachers read any student).
"""
from dataclasses import dataclass

from himaayah.errors import ForbiddenError

ADMIN = "admin"
TEACHER = "teacher"
STUDENT = "student"


@dataclass(frozen=True)
class Caller:
    """Identity bound to a request from its bearer token."""
    id: int
    role: str
    email: str


@dataclass(frozen=True)
class RoutePolicy:
    required_role: str | None = None
    owner_scoped: bool = False


AUTHENTICATED = RoutePolicy()
TEACHER_ONLY = RoutePolicy(required_role=TEACHER)
ADMIN_ONLY = RoutePolicy(required_role=ADMIN)
SELF_OR_STAFF = RoutePolicy(owner_scoped=True)


def passes_role_gate(caller: Caller, required_role: str | None) -> bool:
    if required_role is None:
        return True
    return caller.role == required_role or caller.role == ADMIN


def authorize(caller: Caller, policy: RoutePolicy, owner_user_id: int | None = None) -> None:
    """
    Raise ForbiddenError unless caller satisfies policy.
    owner_user_id is the user id owning the target row; only consulted for owner-scoped policies.
    """
    if not passes_role_gate(caller, policy.required_role):
        raise ForbiddenError()
    if policy.owner_scoped and caller.role == STUDENT and owner_user_id != caller.id:
        raise ForbiddenError()
