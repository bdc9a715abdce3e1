"""Admission registration schemas."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field


class StudentType(str, Enum):
    NEW = "new"
    TRANSFER = "transfer"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class RegistrationBase(BaseModel):
    student_type: StudentType
    full_name: str = Field(min_length=3, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=10, max_length=13)
    gender: Gender
    place_of_birth: str = Field(min_length=3, max_length=100)
    date_of_birth: date
    address: str = Field(min_length=3, max_length=255)
    origin_school: str = Field(min_length=3, max_length=100)
    nisn: str = Field(min_length=10, max_length=10)
    father_name: str = Field(min_length=3, max_length=100)
    father_occupation: str = Field(min_length=3, max_length=100)
    phone_father: str = Field(min_length=10, max_length=13)
    date_of_birth_father: date
    mother_name: str = Field(min_length=3, max_length=100)
    mother_occupation: str = Field(min_length=3, max_length=100)
    phone_mother: str = Field(min_length=10, max_length=13)
    date_of_birth_mother: date


class RegistrationCreateRequest(RegistrationBase):
    pass


class RegistrationOut(RegistrationBase):
    id: int
    email: str
    created_at: datetime
