"""
Project endpoints.

Admins manage every project. Employees see only the projects assigned to
their own employee record.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_linked_employee, is_admin, require_admin, require_any_role
from app.core.exceptions import Forbidden, NotFound
from app.models.employee import Employee
from app.models.project import Project
from app.models.user import User
from app.schemas.common import DeleteResponse
from app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])
logger = logging.getLogger(__name__)


async def _get_project_or_404(db: AsyncSession, project_id: int) -> Project:
    project = await db.get(Project, project_id)
    if project is None:
        raise NotFound("Project not found")
    return project


async def _ensure_employee_exists(db: AsyncSession, employee_id: int) -> None:
    if await db.get(Employee, employee_id) is None:
        raise NotFound("Assigned employee not found")


@router.get("", response_model=list[ProjectRead])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_any_role),
) -> list[Project]:
    query = select(Project).order_by(Project.due_date, Project.id)
    if not is_admin(current_user):
        employee = await get_linked_employee(db, current_user)
        if employee is None:
            raise NotFound("Employee profile not found")
        query = query.where(Project.assigned_to == employee.id)
    result = await db.execute(query)
    return list(result.scalars().all())


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_any_role),
) -> Project:
    project = await _get_project_or_404(db, project_id)
    if not is_admin(current_user):
        employee = await get_linked_employee(db, current_user)
        if employee is None or employee.id != project.assigned_to:
            raise Forbidden("Not authorized to view this project")
    return project


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    body: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> Project:
    await _ensure_employee_exists(db, body.assigned_to)

    project = Project(**body.model_dump(), created_by=admin.id)
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info("Created project %d (%s)", project.id, project.name)
    return project


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> Project:
    project = await _get_project_or_404(db, project_id)
    changes = body.model_dump(exclude_none=True)
    if "assigned_to" in changes:
        await _ensure_employee_exists(db, changes["assigned_to"])

    for field, value in changes.items():
        setattr(project, field, value)
    await db.commit()
    await db.refresh(project)
    logger.info("Updated project %d", project_id)
    return project


@router.delete("/{project_id}", response_model=DeleteResponse)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> DeleteResponse:
    project = await _get_project_or_404(db, project_id)
    await db.delete(project)
    await db.commit()
    logger.info("Deleted project %d", project_id)
    return DeleteResponse(success=True, message="Project removed")
