"""Pydantic schemas for User signup and profile."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

_MIN_PASSWORD_LENGTH = 6


def normalise_email(v: str) -> str:
    v = v.strip().lower()
    if "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("Invalid email address")
    return v


def _check_password(v: str) -> str:
    if len(v) < _MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {_MIN_PASSWORD_LENGTH} characters")
    return v


class UserCreate(BaseModel):
    email: str
    password: str
    full_name: str | None = None

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserRead(BaseModel):
    id: int
    email: str
    full_name: str | None
    role: str
    employee_id: int | None = None
    is_active: bool
    created_at: datetime | None

    model_config = {"from_attributes": True}


class PasswordChange(BaseModel):
    current_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _validate_new(cls, v: str) -> str:
        return _check_password(v)
