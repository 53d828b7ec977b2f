"""
Employee CRUD endpoints.

- GET operations require any authenticated user.
- POST / DELETE require the admin role.
- PUT is open to admins and to the user linked to the employee record.

Create and update take multipart forms so an ``image`` file can be sent
alongside the fields.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db, get_linked_employee, is_admin, require_admin
from app.core.exceptions import BadInput, Conflict, Forbidden, NotFound
from app.core.uploads import remove_image, save_image
from app.models.activity import ActivityType
from app.models.employee import Employee
from app.models.user import User
from app.schemas.common import DeleteResponse
from app.schemas.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from app.services.activity import record_activity

router = APIRouter(prefix="/employees", tags=["employees"])
logger = logging.getLogger(__name__)


def _validated(model: type[BaseModel], **data: Any) -> Any:
    """Run form fields through a schema, reporting failures like body errors."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


async def _email_taken(db: AsyncSession, email: str, exclude_id: int | None = None) -> bool:
    query = select(Employee.id).where(Employee.email == email)
    if exclude_id is not None:
        query = query.where(Employee.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def _get_employee_or_404(db: AsyncSession, employee_id: int) -> Employee:
    emp = await db.get(Employee, employee_id)
    if emp is None:
        raise NotFound("Employee not found")
    return emp


@router.get("", response_model=list[EmployeeRead])
async def list_employees(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> list[Employee]:
    query = select(Employee).order_by(Employee.last_name, Employee.first_name)
    if search:
        # Escape SQL LIKE metacharacters to prevent wildcard injection
        safe = search.replace("%", r"\%").replace("_", r"\_")
        pattern = f"%{safe}%"
        query = query.where(
            or_(
                Employee.first_name.ilike(pattern, escape="\\"),
                Employee.last_name.ilike(pattern, escape="\\"),
                Employee.email.ilike(pattern, escape="\\"),
            )
        )
    result = await db.execute(query.offset(skip).limit(limit))
    return list(result.scalars().all())


@router.post("", response_model=EmployeeRead, status_code=201)
async def create_employee(
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    department: str = Form(...),
    phone: str | None = Form(None),
    position: str | None = Form(None),
    hire_date: str | None = Form(None),
    salary: str | None = Form(None),
    status: str | None = Form(None),
    user_id: str | None = Form(None),
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> Employee:
    body: EmployeeCreate = _validated(
        EmployeeCreate,
        first_name=first_name,
        last_name=last_name,
        email=email,
        department=department,
        phone=phone,
        position=position,
        hire_date=hire_date,
        salary=salary,
        status=status,
        user_id=user_id,
    )

    if await _email_taken(db, body.email):
        raise Conflict("Employee already exists with this email")

    linked_user: User | None = None
    if body.user_id is not None:
        linked_user = await db.get(User, body.user_id)
        if linked_user is None:
            raise BadInput("Linked user not found")

    employee = Employee(**body.model_dump())
    if image is not None and image.filename:
        employee.image = await save_image(image)

    db.add(employee)
    try:
        await db.flush()
        if linked_user is not None:
            linked_user.employee_id = employee.id
        await db.commit()
    except IntegrityError:
        await db.rollback()
        remove_image(employee.image)
        raise Conflict("Employee already exists with this email")

    await db.refresh(employee)
    logger.info("Created employee %d (%s)", employee.id, employee.email)
    return employee


@router.get("/me", response_model=EmployeeRead)
async def get_current_employee(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Employee:
    """Employee record linked to the authenticated user."""
    emp = await get_linked_employee(db, current_user)
    if emp is None:
        raise NotFound("Employee not found")
    return emp


@router.get("/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(get_current_user),
) -> Employee:
    return await _get_employee_or_404(db, employee_id)


@router.put("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    first_name: str | None = Form(None),
    last_name: str | None = Form(None),
    email: str | None = Form(None),
    department: str | None = Form(None),
    phone: str | None = Form(None),
    position: str | None = Form(None),
    hire_date: str | None = Form(None),
    salary: str | None = Form(None),
    status: str | None = Form(None),
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Employee:
    """Admins may update anyone; other users only their own record."""
    emp = await _get_employee_or_404(db, employee_id)

    admin = is_admin(current_user)
    if not admin and emp.user_id != current_user.id:
        raise Forbidden("Not authorized to update this employee profile")

    body: EmployeeUpdate = _validated(
        EmployeeUpdate,
        first_name=first_name,
        last_name=last_name,
        email=email,
        department=department,
        phone=phone,
        position=position,
        hire_date=hire_date,
        salary=salary,
        status=status,
    )

    if body.email and body.email != emp.email and await _email_taken(db, body.email, emp.id):
        raise Conflict("Email already in use by another employee")

    for field, value in body.model_dump(exclude_none=True).items():
        setattr(emp, field, value)

    old_image = new_image = None
    if image is not None and image.filename:
        old_image = emp.image
        new_image = emp.image = await save_image(image)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        remove_image(new_image)
        raise Conflict("Email already in use by another employee")
    if old_image:
        remove_image(old_image)

    if admin and emp.user_id != current_user.id:
        await record_activity(
            db, emp.id, ActivityType.ADMIN_ACTION, "Profile updated by an administrator"
        )
    else:
        await record_activity(db, emp.id, ActivityType.PROFILE_UPDATE, "Updated profile")
    await db.refresh(emp)

    logger.info("Updated employee %d", employee_id)
    return emp


@router.delete("/{employee_id}", response_model=DeleteResponse)
async def delete_employee(
    employee_id: int,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> DeleteResponse:
    """Remove an employee and unlink any user account pointing at it."""
    emp = await _get_employee_or_404(db, employee_id)
    image = emp.image

    await db.execute(
        update(User).where(User.employee_id == emp.id).values(employee_id=None)
    )
    await db.delete(emp)
    await db.commit()
    remove_image(image)

    logger.info("Deleted employee %d", employee_id)
    return DeleteResponse(success=True, message="Employee removed")
