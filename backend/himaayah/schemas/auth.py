"""
Auth request/response schemas.
Required fields are checked by the auth service so a missing field reports "Missing fields".
"""
from pydantic import BaseModel, EmailStr, field_validator


def _bcrypt_limit(v: str | None) -> str | None:
    if v is not None and len(v.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes (bcrypt limit)")
    return v


class RegisterRequest(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None
    role: str | None = "student"

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str | None) -> str | None:
        return _bcrypt_limit(v)


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    name: str | None = None
    email: str
    role: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
    user: UserResponse
