"""
Announcement endpoints.

Both roles read; only admins write. DELETE is a soft delete that hides
the announcement from the active list while keeping the row.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, require_admin, require_any_role
from app.core.exceptions import NotFound
from app.models.announcement import Announcement
from app.models.user import User
from app.schemas.announcement import AnnouncementCreate, AnnouncementRead, AnnouncementUpdate
from app.schemas.common import DeleteResponse

router = APIRouter(prefix="/announcements", tags=["announcements"])
logger = logging.getLogger(__name__)


async def _get_announcement_or_404(db: AsyncSession, announcement_id: int) -> Announcement:
    announcement = await db.get(Announcement, announcement_id)
    if announcement is None:
        raise NotFound(f"Announcement not found with id of {announcement_id}")
    return announcement


@router.get("", response_model=list[AnnouncementRead])
async def list_announcements(
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_any_role),
) -> list[Announcement]:
    """Active announcements, newest first."""
    result = await db.execute(
        select(Announcement)
        .where(Announcement.is_active.is_(True))
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
    )
    return list(result.scalars().all())


@router.get("/{announcement_id}", response_model=AnnouncementRead)
async def get_announcement(
    announcement_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_any_role),
) -> Announcement:
    return await _get_announcement_or_404(db, announcement_id)


@router.post("", response_model=AnnouncementRead, status_code=201)
async def create_announcement(
    body: AnnouncementCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> Announcement:
    announcement = Announcement(**body.model_dump(), created_by=admin.id)
    db.add(announcement)
    await db.commit()
    await db.refresh(announcement)
    logger.info("Announcement %d published", announcement.id)
    return announcement


@router.put("/{announcement_id}", response_model=AnnouncementRead)
async def update_announcement(
    announcement_id: int,
    body: AnnouncementUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> Announcement:
    announcement = await _get_announcement_or_404(db, announcement_id)
    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(announcement, field, value)
    await db.commit()
    await db.refresh(announcement)
    return announcement


@router.delete("/{announcement_id}", response_model=DeleteResponse)
async def delete_announcement(
    announcement_id: int,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> DeleteResponse:
    announcement = await _get_announcement_or_404(db, announcement_id)
    announcement.is_active = False
    await db.commit()
    logger.info("Announcement %d deactivated", announcement_id)
    return DeleteResponse(success=True, message="Announcement removed")
