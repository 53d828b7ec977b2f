"""
Best-effort activity log writer.

Callers commit their own work first, then record the activity. A failure
here is logged and rolled back; it never fails the request that
triggered it.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity import Activity, ActivityType

logger = logging.getLogger(__name__)


async def record_activity(
    db: AsyncSession,
    employee_id: int | None,
    activity_type: ActivityType,
    message: str,
) -> Activity | None:
    if employee_id is None or not message:
        logger.debug("Skipping %s activity: no employee linked", activity_type.value)
        return None

    activity = Activity(employee_id=employee_id, type=activity_type.value, message=message)
    try:
        db.add(activity)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.warning(
            "Could not log %s activity for employee %s: %s",
            activity_type.value,
            employee_id,
            exc,
        )
        return None

    logger.debug("Activity logged: %s for employee %s", activity_type.value, employee_id)
    return activity
