"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from app.schemas.admin import AdminOut, Role


class AuthPrincipal(BaseModel):
    """Authenticated actor derived from a verified bearer token."""

    identity: int = Field(gt=0)
    role: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)


class LoginResult(BaseModel):
    token: str
    admin: AdminOut


__all__ = ["AuthPrincipal", "LoginRequest", "LoginResult", "Role"]
