"""
Attendance upsert engine.

Each employee has at most one attendance row per calendar day, keyed by
``(employee_id, date)`` where ``date`` is a ``YYYY-MM-DD`` string. A
check-in or check-out either creates that row or overwrites its own time
field on the existing one, leaving the other field untouched.

The lookup-before-write keeps the common path cheap; the unique
constraint on the table is what actually guarantees a single row when
two requests race. The loser's insert raises ``IntegrityError``, is
rolled back, and its update is applied to the winner's row instead.
"""

from __future__ import annotations

import logging
from datetime import date as date_cls
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadInput, InvalidIdentifier, NotFound
from app.models.activity import ActivityType
from app.models.attendance import Attendance
from app.models.employee import Employee
from app.services.activity import record_activity

logger = logging.getLogger(__name__)

CHECK_IN = "check_in"
CHECK_OUT = "check_out"

_ACTIVITY = {
    CHECK_IN: (ActivityType.ATTENDANCE_CHECKIN, "Checked in at {time}"),
    CHECK_OUT: (ActivityType.ATTENDANCE_CHECKOUT, "Checked out at {time}"),
}


def today() -> str:
    """Local calendar day as ``YYYY-MM-DD``."""
    return date_cls.today().isoformat()


def display_time(now: datetime | None = None) -> str:
    """Local wall-clock time formatted like ``09:05 AM``."""
    return (now or datetime.now()).strftime("%I:%M %p")


def parse_identifier(value: object) -> int:
    """Accept a positive int or a string of digits; anything else is invalid."""
    if isinstance(value, bool):
        raise InvalidIdentifier("Invalid employee ID format")
    if isinstance(value, int):
        ident = value
    elif isinstance(value, str) and value.strip().isdigit():
        ident = int(value.strip())
    else:
        raise InvalidIdentifier("Invalid employee ID format")
    if ident <= 0:
        raise InvalidIdentifier("Invalid employee ID format")
    return ident


def _parse_day(value: str | None) -> str:
    if value is None or not value.strip():
        return today()
    try:
        return date_cls.fromisoformat(value.strip()).isoformat()
    except ValueError as exc:
        raise BadInput("Date must be formatted YYYY-MM-DD") from exc


async def find_record(db: AsyncSession, employee_id: int, day: str) -> Attendance | None:
    result = await db.execute(
        select(Attendance).where(Attendance.employee_id == employee_id, Attendance.date == day)
    )
    return result.scalar_one_or_none()


def _apply(record: Attendance, field: str, time: str) -> None:
    setattr(record, field, time)
    record.status = "present"


async def _upsert(
    db: AsyncSession,
    field: str,
    employee_id: object,
    day: str | None,
    time: str | None,
) -> Attendance:
    emp_id = parse_identifier(employee_id)
    day = _parse_day(day)
    time = time.strip() if time and time.strip() else display_time()

    if await db.get(Employee, emp_id) is None:
        raise NotFound("Employee not found")

    record = await find_record(db, emp_id, day)
    if record is None:
        record = Attendance(employee_id=emp_id, date=day, status="present")
        setattr(record, field, time)
        db.add(record)
        try:
            await db.commit()
        except IntegrityError:
            # Another request inserted the row between our lookup and insert
            await db.rollback()
            logger.info("Attendance race for employee %d on %s, updating winner", emp_id, day)
            record = await find_record(db, emp_id, day)
            if record is None:
                raise
            _apply(record, field, time)
            await db.commit()
    else:
        _apply(record, field, time)
        await db.commit()

    activity_type, template = _ACTIVITY[field]
    await record_activity(db, emp_id, activity_type, template.format(time=time))
    await db.refresh(record)

    logger.info("Attendance %s for employee %d on %s at %s", field, emp_id, day, time)
    return record


async def check_in(
    db: AsyncSession,
    employee_id: object,
    date: str | None = None,
    time: str | None = None,
) -> Attendance:
    """Record today's (or ``date``'s) check-in; ``check_out`` is preserved."""
    return await _upsert(db, CHECK_IN, employee_id, date, time)


async def check_out(
    db: AsyncSession,
    employee_id: object,
    date: str | None = None,
    time: str | None = None,
) -> Attendance:
    """Record the check-out; legal even when no check-in exists yet."""
    return await _upsert(db, CHECK_OUT, employee_id, date, time)
