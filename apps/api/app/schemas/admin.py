"""Administrator account schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field


class Role(str, Enum):
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class AdminCreateRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=50)
    role: Role
    is_active: bool = True


class AdminUpdateRequest(BaseModel):
    """Full replacement of mutable fields; an omitted password keeps the current hash."""

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str | None = Field(default=None, min_length=6, max_length=50)
    role: Role
    is_active: bool | None = None


class AdminOut(BaseModel):
    id: int
    username: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None
