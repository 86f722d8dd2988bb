"""
LinguaCorp API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test app is built through create_app() with explicit test
       settings and its own phrase store, so tests never share state.

Fixture Hierarchy:
    ├── test_settings: Settings with a known API key and the memory store
    ├── auth_headers: X-API-KEY header carrying that key
    ├── memory_store: Fresh InMemoryPhraseService
    ├── mock_phrase_service: AsyncMock honoring the PhraseService interface
    ├── test_client: HTTPX AsyncClient → app on memory_store
    ├── mock_client: HTTPX AsyncClient → app on mock_phrase_service
    └── sql_session_factory: async sessions on a temporary SQLite file
"""

import os

# Set before any linguacorp import: linguacorp.main builds a module-level app
os.environ["API_KEY"] = "env-key-not-used-in-tests"
os.environ["PHRASE_STORE"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from linguacorp.config import Settings
from linguacorp.database import Base, create_engine_from_settings, create_session_factory
from linguacorp.main import create_app
from linguacorp.models.phrase import PhraseRecord  # noqa: F401
from linguacorp.services.memory_store import InMemoryPhraseService
from linguacorp.services.phrase_base import PhraseService

TEST_API_KEY = "test-api-key"


@pytest.fixture
def test_settings():
    return Settings(api_key=TEST_API_KEY, phrase_store="memory", log_level="WARNING")


@pytest.fixture
def auth_headers():
    return {"X-API-KEY": TEST_API_KEY}


@pytest.fixture
def memory_store():
    return InMemoryPhraseService()


@pytest.fixture
def mock_phrase_service():
    """
    AsyncMock with the PhraseService spec.

    Used where a test must prove that no store call happened, or must make
    the store fail.
    """
    return AsyncMock(spec=PhraseService)


@pytest.fixture
def sample_phrase_body():
    return {"originalText": "Hello", "language": "EN", "translatedText": ""}


@pytest_asyncio.fixture
async def test_client(test_settings, memory_store):
    """
    HTTPX AsyncClient talking to an app backed by the in-memory store.

    Usage:
        async def test_list(test_client, auth_headers):
            response = await test_client.get("/api/phrases", headers=auth_headers)
    """
    app = create_app(settings=test_settings, phrase_service=memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(test_settings, mock_phrase_service):
    app = create_app(settings=test_settings, phrase_service=mock_phrase_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sql_session_factory(tmp_path):
    """
    Session factory on a throwaway SQLite database with the schema created.

    Goes through create_engine_from_settings() so the SQLite branch of the
    engine options is exercised too.
    """
    settings = Settings(
        api_key=TEST_API_KEY,
        phrase_store="database",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'phrases.db'}",
    )
    engine = create_engine_from_settings(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_session_factory(engine)

    await engine.dispose()
