"""Pydantic schemas for Announcement CRUD."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator


def _not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Field must not be empty")
    return v


class AnnouncementCreate(BaseModel):
    title: str
    content: str

    @field_validator("title", "content")
    @classmethod
    def _required_text(cls, v: str) -> str:
        return _not_blank(v)


class AnnouncementUpdate(BaseModel):
    title: str | None = None
    content: str | None = None
    is_active: bool | None = None

    @field_validator("title", "content")
    @classmethod
    def _optional_text(cls, v: str | None) -> str | None:
        return None if v is None else _not_blank(v)


class AnnouncementRead(BaseModel):
    id: int
    title: str
    content: str
    created_by: int | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None

    model_config = {"from_attributes": True}
