"""
MVC Blog - Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:  Mock AsyncSession for pure service unit tests
    ├── db_engine:        Async engine on a throwaway SQLite file, tables created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       One session for service-level integration tests
    ├── categories:       "News" and "Tech" committed; {name: id}
    └── test_client:      HTTPX AsyncClient against a fresh app whose
                          get_db_session dependency uses session_factory
"""

import os
import tempfile

# Environment must be set before any mvcblog import creates the settings
# singleton and the module-level engine.
_TEST_DIR = tempfile.mkdtemp(prefix="mvcblog_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/app.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from mvcblog.database import Base, get_db_session  # noqa: E402
from mvcblog.models import Category  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocked persistence
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_post(mock_db_session):
            mock_db_session.execute.return_value.first.return_value = (post, "News")
            result = await post_service.get_post(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real persistence on SQLite
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database per test, schema created from the ORM metadata."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def categories(session_factory):
    """Commits two categories and returns {name: id}."""
    async with session_factory() as session:
        rows = [Category(name="News"), Category(name="Tech")]
        session.add_all(rows)
        await session.commit()
        return {row.name: row.id for row in rows}


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    Each request gets its own session with the same commit/rollback
    behaviour as the production dependency.
    """
    from mvcblog.main import create_app

    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
