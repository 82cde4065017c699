"""
Auth service: password hashing, JWT creation/verification, registration and login.
Uses bcrypt directly (no passlib) to avoid passlib/bcrypt version conflicts.
Tokens carry user id, role and email; they are not revocable and expire after jwt_expire_hours.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from himaayah import metrics
from himaayah.config import settings
from himaayah.errors import AuthError, ConflictError, StoreError, ValidationError
from himaayah.models.student import Student
from himaayah.models.user import ROLES, User

logger = logging.getLogger(__name__)

# Bcrypt limit is 72 bytes; use 71 so we never exceed
BCRYPT_MAX_BYTES = 71
INVALID_CREDENTIALS = "Invalid credentials"
STUDENT_NUMBER_ATTEMPTS = 20


def _truncate_to_bytes(s: str, max_bytes: int = BCRYPT_MAX_BYTES) -> bytes:
    """Truncate string to at most max_bytes UTF-8; return bytes for bcrypt."""
    if not s:
        return b""
    encoded = s.encode("utf-8")
    if len(encoded) <= max_bytes:
        return encoded
    return encoded[:max_bytes]


def hash_password(password: str) -> str:
    """Hash password for storage. Raises ValueError if password is None."""
    if password is None:
        raise ValueError("password is required")
    raw = _truncate_to_bytes(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(raw, salt)
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    raw = _truncate_to_bytes(plain)
    try:
        return bcrypt.checkpw(raw, hashed.encode("utf-8"))
    except ValueError:
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password(secrets.token_hex(16))


def create_access_token(user_id: int, email: str, role: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=settings.jwt_expire_hours))
    # JWT exp must be numeric (Unix timestamp), not datetime
    payload = {"sub": str(user_id), "email": email, "role": role, "exp": int(expire.timestamp())}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def _new_student_number(db: Session) -> str:
    """'S' + six digits, unused by any existing student."""
    for _ in range(STUDENT_NUMBER_ATTEMPTS):
        candidate = f"S{secrets.randbelow(1_000_000):06d}"
        if not db.query(Student.id).filter(Student.student_number == candidate).first():
            return candidate
    raise StoreError("Could not allocate a student number")


def register_user(
    db: Session, name: str | None, email: str | None, password: str | None, role: str | None = "student"
) -> User:
    """
    Create a user (and, for role=student, its Student profile) in one commit.
    Raises ValidationError on missing fields or unknown role, ConflictError if the email is taken.
    """
    if not name or not email or not password:
        raise ValidationError("Missing fields")
    role = role or "student"
    if role not in ROLES:
        raise ValidationError(f"role must be one of: {', '.join(ROLES)}")
    if db.query(User.id).filter(User.email == email).first():
        raise ConflictError("Email already registered")
    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    try:
        db.add(user)
        db.flush()
        if role == "student":
            db.add(Student(user_id=user.id, student_number=_new_student_number(db)))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Register IntegrityError for %s: %s", email, e.orig)
        if db.query(User.id).filter(User.email == email).first():
            raise ConflictError("Email already registered") from e
        raise StoreError() from e
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(db: Session, email: str | None, password: str | None) -> User:
    """Return the user for valid credentials. Unknown email and wrong password raise the same AuthError."""
    if not email or not password:
        raise ValidationError("Missing fields")
    user = db.query(User).filter(User.email == email).first()
    # Unknown emails still run one bcrypt check, like a wrong password
    password_ok = verify_password(password, user.password_hash if user else _dummy_hash())
    if not user or not password_ok:
        failures = metrics.increment_login_failures_total()
        logger.warning("Login failed for %s (failures so far: %s)", email, failures)
        raise AuthError(INVALID_CREDENTIALS)
    logger.info("Login ok user id=%s", user.id)
    return user
