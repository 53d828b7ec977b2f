"""Pydantic schemas for the activity feed."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ActivityRead(BaseModel):
    id: int
    employee_id: int
    type: str
    message: str
    date: datetime | None

    model_config = {"from_attributes": True}
