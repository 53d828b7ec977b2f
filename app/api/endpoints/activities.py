"""
Activity feed endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.models.activity import Activity
from app.models.user import User
from app.schemas.activity import ActivityRead

router = APIRouter(prefix="/activities", tags=["activities"])

FEED_SIZE = 10


@router.get("/{employee_id}", response_model=list[ActivityRead])
async def get_activities(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> list[Activity]:
    """The latest activities for an employee, newest first."""
    result = await db.execute(
        select(Activity)
        .where(Activity.employee_id == employee_id)
        .order_by(Activity.date.desc(), Activity.id.desc())
        .limit(FEED_SIZE)
    )
    return list(result.scalars().all())
