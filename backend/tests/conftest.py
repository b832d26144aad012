"""
MemoPad Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine:          SQLite (aiosqlite) engine with the memos schema
    ├── db_session_factory: async_sessionmaker bound to db_engine
    ├── db_session:         One AsyncSession for repository tests
    ├── repository:         MemoRepository over db_session
    ├── mock_db_session:    AsyncMock session for failure-path tests
    ├── memo_form:          A valid MemoForm
    └── test_client:        HTTPX AsyncClient wired to the app with the
                            test database and a patched Gemini summarizer
"""

import os
import tempfile
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock, patch

# Settings are read at import time, so the environment is set before any app import
_TEST_DIR = tempfile.mkdtemp(prefix="memopad_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/health.db"
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "1000"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base, get_db_session
from app.models.memo import MemoRow  # noqa: F401  (registers the table)
from app.schemas.memo import MemoForm
from app.services.memo_repository import MemoRepository


def make_gemini_response(text):
    """Build an object shaped like a Gemini GenerateContentResponse."""
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(candidates=[candidate])


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database file with the memos table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/memos.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(db_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with db_session_factory() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return MemoRepository(db_session)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = SQLAlchemyError("connection lost")
        await MemoRepository(mock_db_session).list_memos()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def memo_form():
    return MemoForm(
        title="Groceries",
        content="- milk\n- eggs\n- **coffee**",
        category="personal",
        tags=["shopping", "weekly", "shopping"],
    )


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_genai():
    """Patches the Gemini SDK module used by the summary service."""
    with patch("app.services.gemini_service.genai") as mocked:
        model = MagicMock()
        model.generate_content_async = AsyncMock(
            return_value=make_gemini_response("A short summary.")
        )
        mocked.GenerativeModel.return_value = model
        yield mocked


@pytest_asyncio.fixture
async def test_client(db_session_factory, mock_genai):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    Database sessions come from the per-test SQLite database; the summarizer
    is a GeminiService built against the patched SDK (see mock_genai).
    """
    from app.main import app
    from app.services.gemini_service import GeminiService, get_summarizer

    async def override_get_db_session():
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    summarizer = GeminiService(api_key="test-key-not-real")
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_summarizer] = lambda: summarizer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
