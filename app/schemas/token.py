"""Pydantic schemas for login and bearer tokens."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from app.schemas.user import UserRead


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        return v.strip().lower()


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    user: UserRead
