"""Pydantic schemas for Employee CRUD.

Create and update arrive as multipart forms (so an image can ride along);
the endpoint collects the form fields and validates them through these
models. Browsers send empty strings for untouched inputs, so blank
optional values are read as "not provided".
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, field_validator

from app.schemas.user import normalise_email


def _blank_to_none(v: object) -> object:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class EmployeeCreate(BaseModel):
    first_name: str
    last_name: str
    email: str
    department: str
    phone: str | None = None
    position: str | None = None
    hire_date: date | None = None
    salary: float = 0
    status: str = "active"
    user_id: int | None = None

    @field_validator("phone", "position", "hire_date", "user_id", mode="before")
    @classmethod
    def _optional_blank(cls, v: object) -> object:
        return _blank_to_none(v)

    @field_validator("salary", mode="before")
    @classmethod
    def _salary_default(cls, v: object) -> object:
        return 0 if _blank_to_none(v) is None else v

    @field_validator("status", mode="before")
    @classmethod
    def _status_default(cls, v: object) -> object:
        return "active" if _blank_to_none(v) is None else v

    @field_validator("first_name", "last_name", "department")
    @classmethod
    def _required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be empty")
        if len(v) > 100:
            raise ValueError("Field must not exceed 100 characters")
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalise_email(v)

    @field_validator("salary")
    @classmethod
    def _salary(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Salary must not be negative")
        return v


class EmployeeUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    department: str | None = None
    phone: str | None = None
    position: str | None = None
    hire_date: date | None = None
    salary: float | None = None
    status: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _optional_blank(cls, v: object) -> object:
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str | None) -> str | None:
        return normalise_email(v) if v is not None else v

    @field_validator("salary")
    @classmethod
    def _salary(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError("Salary must not be negative")
        return v


class EmployeeRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None
    department: str
    position: str | None
    hire_date: date | None
    salary: float
    status: str
    image: str
    user_id: int | None
    created_at: datetime | None

    model_config = {"from_attributes": True}
