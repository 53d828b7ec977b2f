"""
Employee model: the HR record administrators manage.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Employee(Base):
    __tablename__ = "employees"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    first_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    last_name: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    phone: str | None = Column(String(30), nullable=True)  # type: ignore[assignment]
    department: str = Column(String(100), nullable=False)  # type: ignore[assignment]
    position: str | None = Column(String(100), nullable=True)  # type: ignore[assignment]
    hire_date: date | None = Column(Date, nullable=True)  # type: ignore[assignment]
    salary: float = Column(Float, nullable=False, default=0)  # type: ignore[assignment]
    status: str = Column(String(20), nullable=False, default="active")  # type: ignore[assignment]
    image: str = Column(String(300), nullable=False, default="")  # type: ignore[assignment]
    user_id: int | None = Column(Integer, ForeignKey("users.id"), nullable=True)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    attendances = relationship(
        "Attendance",
        back_populates="employee",
        cascade="all, delete-orphan",
    )
    activities = relationship("Activity", cascade="all, delete-orphan")
    tasks = relationship("Task", cascade="all, delete-orphan")
    projects = relationship("Project", cascade="all, delete-orphan")