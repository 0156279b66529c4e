import uuid
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

import shamiri.core.database as database_module
from shamiri.core.database import Database
from shamiri.llm.providers.base import ChatResponse
from shamiri.llm.rate_limiter import reset_creation_rate_limiter
from shamiri.models.journal import JournalEntry
from server.config import config
from server.main import app

MOCK_ANSWER = "<p>This is a mocked answer about your entry.</p>"


# LLM client mock - always active to prevent real API calls
@pytest.fixture(autouse=True)
def mock_chat_client(monkeypatch):
    """Replace the shared chat client everywhere it is looked up."""
    client = AsyncMock()
    client.chat = AsyncMock(return_value=ChatResponse(content=MOCK_ANSWER, model="mock-model"))
    client.get_provider_name = MagicMock(return_value="mock")

    monkeypatch.setattr("shamiri.llm.client_factory.get_chat_client", lambda: client)
    monkeypatch.setattr("shamiri.llm.completion.get_chat_client", lambda: client)
    return client

@pytest.fixture(autouse=True)
def no_image_lookup(monkeypatch):
    """An empty key makes ImageService skip the network."""
    monkeypatch.setattr(config.PIXABAY, "API_KEY", "")

@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    reset_creation_rate_limiter()
    yield
    reset_creation_rate_limiter()

@pytest.fixture
async def db():
    """In-memory database with the schema created."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.init_schema()
    yield database
    await database.close()

@pytest.fixture
def make_entry():
    def _make(user_id: str, **overrides) -> JournalEntry:
        now = datetime(2026, 3, 14, 7, 30, 0)
        values = dict(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title="Morning",
            content="Felt calm",
            mood="CALM",
            mood_score=8,
            created_at=now,
            updated_at=now,
        )
        values.update(overrides)
        return JournalEntry(**values)
    return _make

@pytest.fixture
def test_client(monkeypatch):
    # Lifespan picks up this handle instead of opening the configured database
    monkeypatch.setattr(database_module, "_database", Database("sqlite+aiosqlite:///:memory:"))
    with TestClient(app) as client:
        yield client

@pytest.fixture
def auth_headers():
    def _headers(principal: str = "user_a"):
        return {config.AUTH.PRINCIPAL_HEADER: principal}
    return _headers
