"""
Shared test fixtures for the Employee Tracker test suite.

Every test gets its own in-memory aiosqlite database, wired into the app
through ``dependency_overrides[get_db]``. Users are real rows and carry
real bearer tokens so the auth stages run unmodified.
"""

import os
import sys
import tempfile
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-employee-tracker-suite"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="tracker-uploads-")
os.environ["CORS_ORIGINS"] = '["*"]'

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.core.security import create_access_token, get_password_hash
from app.db.base import Base
from app.main import app
from app.models.employee import Employee
from app.models.user import User

PASSWORD = "secret123"


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh database per test, installed as the app's ``get_db``."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield factory
    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


async def create_user(
    session: AsyncSession,
    email: str,
    role: str = "employee",
    password: str = PASSWORD,
) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(password),
        full_name=email.split("@")[0].title(),
        role=role,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_employee(
    session: AsyncSession,
    email: str,
    user: User | None = None,
    **fields,
) -> Employee:
    employee = Employee(
        first_name=fields.pop("first_name", "Test"),
        last_name=fields.pop("last_name", "Employee"),
        email=email,
        department=fields.pop("department", "Engineering"),
        user_id=user.id if user else None,
        **fields,
    )
    session.add(employee)
    await session.commit()
    await session.refresh(employee)
    if user is not None:
        user.employee_id = employee.id
        await session.commit()
    return employee


@pytest.fixture
async def admin_user(db_session) -> User:
    return await create_user(db_session, "admin@example.com", role="admin")


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
async def employee_user(db_session) -> User:
    return await create_user(db_session, "worker@example.com", role="employee")


@pytest.fixture
async def employee(db_session, employee_user) -> Employee:
    """Employee record linked to ``employee_user``."""
    return await create_employee(
        db_session, "worker@example.com", user=employee_user, first_name="Wendy", last_name="Worker"
    )


@pytest.fixture
def employee_headers(employee_user) -> dict[str, str]:
    return auth_headers(employee_user)


@pytest.fixture
def make_user(db_session):
    """Factory fixture: ``await make_user(email, role=...)``."""

    async def _make(email: str, role: str = "employee", password: str = PASSWORD) -> User:
        return await create_user(db_session, email, role=role, password=password)

    return _make


@pytest.fixture
def make_employee(db_session):
    """Factory fixture: ``await make_employee(email, user=None, **fields)``."""

    async def _make(email: str, user: User | None = None, **fields) -> Employee:
        return await create_employee(db_session, email, user=user, **fields)

    return _make
