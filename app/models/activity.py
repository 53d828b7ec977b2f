"""
Activity model: append-only audit trail shown on dashboards.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from app.db.base import Base


class ActivityType(str, enum.Enum):
    LOGIN = "login"
    PROFILE_UPDATE = "profile_update"
    TASK_COMPLETED = "task_completed"
    ATTENDANCE_CHECKIN = "attendance_checkin"
    ATTENDANCE_CHECKOUT = "attendance_checkout"
    PASSWORD_CHANGE = "password_change"
    ADMIN_ACTION = "admin_action"


class Activity(Base):
    __tablename__ = "activities"
    __table_args__ = (Index("ix_activity_employee_date", "employee_id", "date"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(Integer, ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    type: str = Column(String(30), nullable=False)  # type: ignore[assignment]
    message: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    date: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
