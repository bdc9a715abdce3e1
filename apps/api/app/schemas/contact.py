"""Contact message schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    email: EmailStr
    subject: str = Field(min_length=3, max_length=150)
    message: str = Field(min_length=3, max_length=2000)


class ContactOut(BaseModel):
    id: int
    email: str
    subject: str
    message: str
    created_at: datetime
