"""
Auth endpoints: signup, login, current user and password change.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_db
from app.core.config import settings
from app.core.exceptions import BadInput, Conflict, Forbidden, Unauthorized
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.activity import ActivityType
from app.models.employee import Employee
from app.models.user import Role, User
from app.schemas.common import MessageResponse
from app.schemas.token import AuthResponse, LoginRequest
from app.schemas.user import PasswordChange, UserCreate, UserRead
from app.services.activity import record_activity

# Rate limiter: keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id),
        user=UserRead.model_validate(user),
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Register an employee account and sign it in.

    If HR already created an employee record with the same email and no
    account owns it yet, the two are linked.
    """
    existing = await db.execute(select(User).where(User.email == body.email))
    if existing.scalar_one_or_none():
        raise Conflict("User already exists with this email")

    user = User(
        email=body.email,
        hashed_password=get_password_hash(body.password),
        full_name=body.full_name,
        role=Role.EMPLOYEE.value,
    )
    db.add(user)
    await db.flush()

    result = await db.execute(
        select(Employee).where(Employee.email == body.email, Employee.user_id.is_(None))
    )
    employee = result.scalar_one_or_none()
    if employee is not None:
        employee.user_id = user.id
        user.employee_id = employee.id

    await db.commit()
    await db.refresh(user)
    logger.info("User %s signed up (employee link: %s)", user.email, user.employee_id)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Authenticate with email/password and return a bearer token."""
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(body.password, user.hashed_password):
        raise Unauthorized("Invalid email or password")
    if not user.is_active:
        raise Forbidden("User account is inactive")

    await record_activity(db, user.employee_id, ActivityType.LOGIN, "Logged in")
    await db.refresh(user)
    logger.info("User %s logged in", user.email)
    return _auth_response(user)


@router.get("/me", response_model=UserRead)
async def read_current_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Return profile of the currently authenticated user."""
    return current_user


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    body: PasswordChange,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    if not verify_password(body.current_password, current_user.hashed_password):
        raise BadInput("Current password is incorrect")

    current_user.hashed_password = get_password_hash(body.new_password)
    await db.commit()
    await record_activity(
        db, current_user.employee_id, ActivityType.PASSWORD_CHANGE, "Changed password"
    )
    logger.info("User %d changed password", current_user.id)
    return MessageResponse(message="Password updated successfully")
