"""
FastAPI dependencies: database session, authentication and role gates.

Protected routes compose two stages: ``get_current_user`` turns the
bearer token into a ``User`` (or rejects with 401), then the dependency
built by ``authorize`` accepts or rejects that user by role (403).
Handlers receive the user and trust both stages.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Callable, Coroutine
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import Forbidden, Unauthorized
from app.core.security import ExpiredToken, TokenError, verify_access_token
from app.db.session import async_session_factory
from app.models.employee import Employee
from app.models.user import Role, User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Authentication ──────────────────────────────────────────────────
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Verify the ``Authorization: Bearer`` token and load its user."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authorized, no token")

    try:
        payload = verify_access_token(credentials.credentials)
    except ExpiredToken:
        raise Unauthorized("Token expired")
    except TokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise Unauthorized("Not authorized, token failed")

    try:
        user_id = int(payload["sub"])
    except ValueError:
        raise Unauthorized("Not authorized, token failed")

    user = await db.get(User, user_id)
    if user is None:
        raise Unauthorized("Not authorized, user not found")
    if not user.is_active:
        raise Unauthorized("User account is inactive")
    return user


# ── Authorization ───────────────────────────────────────────────────
def check_role(user: User | None, allowed: frozenset[Role]) -> User:
    """Accept ``user`` only if its role is one of ``allowed``.

    No user at all means authentication never ran, which is a 401; a role
    outside the ``Role`` enum is never granted.
    """
    if user is None:
        raise Unauthorized("Not authorized, user role not found")
    role = Role.parse(user.role)
    if role is None or role not in allowed:
        raise Forbidden("Not authorized, insufficient permissions")
    return user


def authorize(*roles: Role) -> Callable[..., Coroutine[Any, Any, User]]:
    """Build a dependency admitting authenticated users with one of ``roles``."""
    allowed = frozenset(roles)

    async def _dependency(current_user: User = Depends(get_current_user)) -> User:
        return check_role(current_user, allowed)

    return _dependency


require_admin = authorize(Role.ADMIN)
require_any_role = authorize(Role.ADMIN, Role.EMPLOYEE)


def is_admin(user: User) -> bool:
    return Role.parse(user.role) is Role.ADMIN


async def get_linked_employee(db: AsyncSession, user: User) -> Employee | None:
    """The employee record owned by ``user``, if any."""
    if user.employee_id is not None:
        employee = await db.get(Employee, user.employee_id)
        if employee is not None:
            return employee
    result = await db.execute(select(Employee).where(Employee.user_id == user.id))
    return result.scalars().first()
