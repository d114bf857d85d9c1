"""
Noteful Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── db_engine: fresh SQLite file database with the schema created
    ├── session_factory: sessions bound to db_engine, for seeding/inspecting
    ├── test_client: HTTPX AsyncClient whose requests use db_engine
    ├── seeded_folders / seeded_notes: rows from tests/fixtures.py, inserted
    └── commit_failing_client: like test_client, but every COMMIT fails
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time, so these must be set before any app import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="noteful_test_"), "app.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = ""
os.environ["DEBUG"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from app.database import Base, build_engine, get_db_session, make_session_dependency  # noqa: E402
from app.main import app  # noqa: E402
from app.models.folder import Folder  # noqa: E402
from app.models.note import Note  # noqa: E402
from tests.fixtures import insert_rows, make_folders_array, make_notes_array  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_folder(mock_db_session):
            mock_result = MagicMock()
            mock_result.scalar_one_or_none.return_value = folder
            mock_db_session.execute.return_value = mock_result
    """
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A throwaway SQLite database with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app in-process.

    get_db_session is overridden so every request gets a session on the
    per-test database instead of the configured one.
    """
    app.dependency_overrides[get_db_session] = make_session_dependency(session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seeded_folders(session_factory):
    folders = make_folders_array()
    await insert_rows(session_factory, Folder, folders)
    return folders


@pytest_asyncio.fixture
async def seeded_notes(session_factory, seeded_folders):
    notes = make_notes_array()
    await insert_rows(session_factory, Note, notes)
    return notes


class CommitFailsSession(AsyncSession):
    """Real session on the test database whose COMMIT always fails."""

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


@pytest_asyncio.fixture
async def commit_failing_client(db_engine):
    """
    Statements run normally but nothing can be committed, so a write
    route must answer 500 and leave the tables untouched.
    """
    factory = async_sessionmaker(db_engine, class_=CommitFailsSession, expire_on_commit=False)
    app.dependency_overrides[get_db_session] = make_session_dependency(factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
