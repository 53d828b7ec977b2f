"""Pydantic schemas for Task CRUD."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, field_validator

TaskStatus = Literal["pending", "in-progress", "completed"]


class TaskCreate(BaseModel):
    title: str
    description: str | None = None
    assigned_to: int
    due_date: dt.date | None = None

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be empty")
        return v


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    due_date: dt.date | None = None
    status: TaskStatus | None = None


class TaskRead(BaseModel):
    id: int
    title: str
    description: str | None
    assigned_to: int
    assigned_by: int | None
    due_date: dt.date | None
    status: str
    created_at: dt.datetime | None
    updated_at: dt.datetime | None

    model_config = {"from_attributes": True}
