"""Test fixtures — a fresh in-memory SQLite database per test.

1. Each test gets its own engine on a single shared in-memory
   connection (StaticPool), with the schema created up front.
2. The app's get_db dependency is overridden to hand out sessions
   bound to that engine, so nothing touches a real database file.
3. bcrypt rounds are lowered through the environment before the app
   is imported, keeping registration/login fast.
"""

import os

os.environ.setdefault("LOTTOHIST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOTTOHIST_BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOTTOHIST_AUTO_CREATE_SCHEMA", "false")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from lottohist.db.engine import get_db, init_models  # noqa: E402
from lottohist.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def session_factory():
    """Per-test engine + session factory over an in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for service-level tests and direct DB assertions."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with the app's get_db pointed at the test database.

    Auth is NOT overridden: tests register/login and send real tokens.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def lenient_client(session_factory):
    """Like `client`, but app exceptions surface as responses, not raises.

    Used by tests that force internal failures and inspect the 500.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
