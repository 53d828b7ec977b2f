"""Pydantic schemas for attendance check-in / check-out."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class AttendanceEvent(BaseModel):
    # Raw value, parsed by the upsert engine
    employee_id: Any
    date: str | None = None  # YYYY-MM-DD, defaults to today
    time: str | None = Field(default=None, max_length=20)  # display time, defaults to now


class AttendanceRead(BaseModel):
    id: int
    employee_id: int
    date: str
    check_in: str | None
    check_out: str | None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
