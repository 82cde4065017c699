"""
Auth routes: register (default role student), login (JWT), GET /me.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from himaayah.database import get_db
from himaayah.errors import NotFoundError
from himaayah.models.user import User
from himaayah.schemas.auth import RegisterRequest, LoginRequest, TokenResponse, UserResponse
from himaayah.services.auth import authenticate_user, create_access_token, register_user
from himaayah.services.policy import Caller
from himaayah.api.deps import get_current_caller

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def _token_response(user: User) -> TokenResponse:
    token = create_access_token(user.id, user.email, user.role)
    return TokenResponse(
        token=token,
        user=UserResponse(id=user.id, name=user.name, email=user.email, role=user.role),
    )


@router.post("/auth/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a user; students also get a profile with a generated student number."""
    user = register_user(db, data.name, data.email, data.password, data.role)
    return _token_response(user)


@router.post("/auth/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Login with email/password; returns JWT and the public user view."""
    user = authenticate_user(db, data.email, data.password)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def me(caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)):
    """Return current user (id, name, email, role)."""
    user = db.query(User).filter(User.id == caller.id).first()
    if not user:
        raise NotFoundError("User not found")
    return UserResponse(id=user.id, name=user.name, email=user.email, role=user.role)
