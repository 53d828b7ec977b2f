"""
Task endpoints.

Admins create, edit and delete tasks. Any authenticated user can read
them; the assigned employee may move a task through its statuses.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db, get_linked_employee, is_admin, require_admin
from app.core.exceptions import Forbidden, NotFound
from app.models.activity import ActivityType
from app.models.employee import Employee
from app.models.task import Task
from app.models.user import User
from app.schemas.common import DeleteResponse
from app.schemas.task import TaskCreate, TaskRead, TaskUpdate
from app.services.activity import record_activity

router = APIRouter(prefix="/tasks", tags=["tasks"])
logger = logging.getLogger(__name__)


async def _get_task_or_404(db: AsyncSession, task_id: int) -> Task:
    task = await db.get(Task, task_id)
    if task is None:
        raise NotFound("Task not found")
    return task


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> Task:
    if await db.get(Employee, body.assigned_to) is None:
        raise NotFound("Assigned employee not found")

    task = Task(**body.model_dump(), assigned_by=admin.id)
    db.add(task)
    await db.commit()
    await db.refresh(task)
    logger.info("Task %d assigned to employee %d", task.id, task.assigned_to)
    return task


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    assigned_to: str | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> list[Task]:
    """All tasks, or only those of ``assigned_to``.

    A malformed ``assigned_to`` matches nothing rather than failing.
    """
    query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
    if assigned_to is not None:
        if not assigned_to.strip().isdigit():
            return []
        query = query.where(Task.assigned_to == int(assigned_to))
    result = await db.execute(query)
    return list(result.scalars().all())


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> Task:
    return await _get_task_or_404(db, task_id)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Task:
    task = await _get_task_or_404(db, task_id)
    changes = body.model_dump(exclude_none=True)

    if not is_admin(current_user):
        employee = await get_linked_employee(db, current_user)
        if employee is None or employee.id != task.assigned_to:
            raise Forbidden("Not authorized to update this task")
        if set(changes) - {"status"}:
            raise Forbidden("Employees may only update the task status")

    was_completed = task.status == "completed"
    for field, value in changes.items():
        setattr(task, field, value)
    await db.commit()

    if task.status == "completed" and not was_completed:
        await record_activity(
            db, task.assigned_to, ActivityType.TASK_COMPLETED, f"Completed task: {task.title}"
        )
    await db.refresh(task)

    logger.info("Updated task %d (%s)", task.id, ", ".join(changes) or "no changes")
    return task


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> DeleteResponse:
    task = await _get_task_or_404(db, task_id)
    await db.delete(task)
    await db.commit()
    logger.info("Deleted task %d", task_id)
    return DeleteResponse(success=True, message="Task removed")
