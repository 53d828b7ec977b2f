"""Pydantic schemas for Project CRUD."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, field_validator

ProjectStatus = Literal["not-started", "in-progress", "completed"]


class ProjectCreate(BaseModel):
    name: str
    description: str | None = None
    due_date: dt.date
    status: ProjectStatus = "not-started"
    assigned_to: int

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v


class ProjectUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    due_date: dt.date | None = None
    status: ProjectStatus | None = None
    assigned_to: int | None = None


class ProjectRead(BaseModel):
    id: int
    name: str
    description: str | None
    due_date: dt.date
    status: str
    assigned_to: int
    created_by: int | None
    created_at: dt.datetime | None
    updated_at: dt.datetime | None

    model_config = {"from_attributes": True}
