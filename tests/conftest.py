"""Pytest configuration and fixtures for cms-admin.

Environment is set before any cms_admin settings are read. Repository and
service tests run against an in-memory SQLite database (aiosqlite) created
from the ORM metadata; API tests run the FastAPI app over ASGI with the DB
session dependencies overridden to that same session.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-cms-admin-tests-only")

from collections.abc import AsyncIterator, Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from cms_admin.core.config import get_settings  # noqa: E402
from cms_admin.core.limiter import limiter  # noqa: E402
from cms_admin.infrastructure.persistence import models  # noqa: E402,F401
from cms_admin.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from cms_admin.infrastructure.security.jwt import create_access_token  # noqa: E402
from cms_admin.main import create_app  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory SQLite database per test, with foreign keys enforced (for cascades)."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session for repository/integration tests. Rolled back after the test."""
    factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app(db_session: AsyncSession) -> FastAPI:
    """App with both session dependencies bound to the test session and rate limits off."""
    application = create_app()

    async def _override_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db] = _override_db
    application.dependency_overrides[get_db_transactional] = _override_db
    limiter.enabled = False
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build bearer headers for a user with the given permission claims."""

    def _headers(user_id: str = "admin-user", *permissions: str) -> dict[str, str]:
        token = create_access_token(user_id, permissions)
        return {"Authorization": f"Bearer {token}"}

    return _headers
