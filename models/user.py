# models/user.py
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.common import RequiredStr

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


class UserCreate(BaseModel):
    fullName: RequiredStr
    email: str
    mobileNumber: RequiredStr
    password: str = Field(min_length=6, max_length=72)
    role: RequiredStr
    className: RequiredStr

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _normalize_email(value)


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fullName: Optional[RequiredStr] = None
    mobileNumber: Optional[RequiredStr] = None
    role: Optional[RequiredStr] = None
    className: Optional[RequiredStr] = None


class PasswordChange(BaseModel):
    currentPassword: str
    newPassword: str = Field(min_length=6, max_length=72)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()
