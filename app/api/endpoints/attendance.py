"""
Attendance endpoints: daily check-in / check-out and history.

All routes require an authenticated user of either role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.models.attendance import Attendance
from app.models.user import User
from app.schemas.attendance import AttendanceEvent, AttendanceRead
from app.services import attendance as attendance_service

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/check-in", response_model=AttendanceRead)
async def check_in(
    body: AttendanceEvent,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> Attendance:
    return await attendance_service.check_in(db, body.employee_id, body.date, body.time)


@router.post("/check-out", response_model=AttendanceRead)
async def check_out(
    body: AttendanceEvent,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> Attendance:
    return await attendance_service.check_out(db, body.employee_id, body.date, body.time)


@router.get("/{employee_id}", response_model=list[AttendanceRead])
async def get_attendance(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> list[Attendance]:
    """All records for one employee, most recent day first."""
    result = await db.execute(
        select(Attendance)
        .where(Attendance.employee_id == employee_id)
        .order_by(Attendance.date.desc())
    )
    return list(result.scalars().all())
