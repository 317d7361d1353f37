"""
Markdown Notes Backend - Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the whole suite.
How:   Every test gets a fresh SQLite file (through aiosqlite) with the
       schema created from the ORM metadata. No external database needed.

Fixture Hierarchy (all function-scoped):
    ├── db_path / test_engine / session_factory: isolated SQLite database
    ├── db_session: one AsyncSession, like a single request would have
    ├── note_store / note_service: services bound to db_session
    └── test_client: HTTPX AsyncClient against the FastAPI app, with
        get_db_session overridden to use the test database
"""

import os
import tempfile

# Settings are read at import time; point them at throwaway values first
_tmp_dir = tempfile.mkdtemp(prefix="markdown_notes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/app.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from markdown_notes.database import Base, build_engine, get_db_session  # noqa: E402
from markdown_notes.models.note import Note  # noqa: E402,F401
from markdown_notes.services.markdown_processor import MarkdownProcessor  # noqa: E402
from markdown_notes.services.note_service import NoteService  # noqa: E402
from markdown_notes.services.note_store import NoteStore  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    """Filesystem path of the per-test SQLite database."""
    return tmp_path / "notes.db"


@pytest_asyncio.fixture
async def test_engine(db_path):
    engine = build_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    A session playing the role of one request.

    Tests that need data visible to other connections call commit() themselves.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def note_store(db_session):
    return NoteStore(db_session)


@pytest.fixture
def markdown_processor():
    return MarkdownProcessor()


@pytest.fixture
def note_service(note_store, markdown_processor):
    return NoteService(store=note_store, processor=markdown_processor)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from markdown_notes.main import app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
