"""
Shared dependencies: caller identity from the Bearer token and per-route policy guards.
Routes depend on guard(<RoutePolicy>) instead of comparing roles inline.
"""
import logging
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import AuthError, ForbiddenError
from himaayah.models.student import Student
from himaayah.services.auth import decode_access_token
from himaayah.services.policy import Caller, RoutePolicy, authorize

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

STUDENT_PROFILE_REQUIRED = "Student profile required"


def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Caller:
    """Require valid Bearer token; return the Caller it carries or 401."""
    if not credentials or not (getattr(credentials, "credentials", None) or "").strip():
        logger.debug("Auth failed: no Bearer token in request")
        raise AuthError("Auth required")
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload or "role" not in payload:
        logger.debug("Auth failed: invalid or expired token")
        raise AuthError("Invalid token")
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthError("Invalid token")
    return Caller(id=user_id, role=payload["role"], email=payload.get("email") or "")


def guard(policy: RoutePolicy):
    """Dependency factory: authenticate, then apply the role gate of policy.
    Owner-scoped policies still need the route to call authorize() with the target's owner."""

    def _guard(caller: Caller = Depends(get_current_caller)) -> Caller:
        authorize(caller, RoutePolicy(required_role=policy.required_role))
        return caller

    return _guard


def get_current_student(
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
) -> Student:
    """Student profile of the caller; 403 when the caller has none (teachers, admins, orphaned accounts)."""
    student = db.query(Student).filter(Student.user_id == caller.id).first()
    if not student:
        raise ForbiddenError(STUDENT_PROFILE_REQUIRED)
    return student
