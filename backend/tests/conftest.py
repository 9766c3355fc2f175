import pytest
import os
import sys
from pathlib import Path
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import get_settings
from db import Database, HistoryStore

MOON_CLAIM = "The moon is made of cheese"
MOON_REPLY_TEXT = (
    "Here is my analysis.\n"
    "```json\n"
    '{"verdict": "Fake", "score": 97, "explanation": "No scientific evidence [1]."}\n'
    "```"
)


class FakeProvider:
    """Stands in for GeminiClient; returns a fixed reply or raises a fixed error."""

    def __init__(self, text=MOON_REPLY_TEXT, grounding_metadata=None, error=None):
        self.text = text
        self.grounding_metadata = grounding_metadata if grounding_metadata is not None else {
            "groundingChunks": [{"web": {"uri": "https://nasa.gov", "title": "NASA"}}]
        }
        self.error = error
        self.calls = []

    async def analyze(self, claim):
        self.calls.append(claim)
        if self.error is not None:
            raise self.error
        return {"text": self.text, "grounding_metadata": self.grounding_metadata, "raw": {}}


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables before any imports."""
    env_vars = {
        "GEMINI_API_KEY": "test_gemini_key",
        "GEMINI_MODEL": "gemini-2.5-flash",
        "DATABASE_URL": "sqlite://",
        "OWNER_SCOPED": "false",
    }
    for key, value in env_vars.items():
        os.environ[key] = value
    get_settings.cache_clear()
    yield
    # Cleanup
    for key in env_vars.keys():
        os.environ.pop(key, None)
    get_settings.cache_clear()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock all required environment variables."""
    env_vars = {
        "GEMINI_API_KEY": "test_gemini_key",
        "GEMINI_MODEL": "gemini-2.5-flash",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield env_vars
    get_settings.cache_clear()


@pytest.fixture
def settings():
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def store(database):
    return HistoryStore(database)


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def test_client(fake_provider):
    """TestClient over a fresh in-memory database, with the LLM replaced by fake_provider."""
    get_settings.cache_clear()
    import main
    with TestClient(main.app) as client:
        main.app.state.provider = fake_provider
        yield client
    get_settings.cache_clear()


@pytest.fixture
def owner_scoped_client(monkeypatch, fake_provider):
    monkeypatch.setenv("OWNER_SCOPED", "true")
    get_settings.cache_clear()
    import main
    with TestClient(main.app) as client:
        main.app.state.provider = fake_provider
        yield client
    get_settings.cache_clear()


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient for API calls."""
    mock_client = MagicMock()
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock()
    mock_client.post = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def sample_gemini_response():
    """Sample Gemini generateContent response with search grounding."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [
                        {"text": "Analysis follows.\n```json\n"},
                        {"text": '{"verdict": "Real", "score": 88, "explanation": "Confirmed by [1] and [2]."}\n```'}
                    ]
                },
                "finishReason": "STOP",
                "groundingMetadata": {
                    "groundingChunks": [
                        {"web": {"uri": "https://example.com/a", "title": "Example A"}},
                        {"web": {"uri": "https://example.com/b", "title": "Example B"}},
                        {"web": {"uri": "https://example.com/a", "title": "Example A again"}}
                    ]
                }
            }
        ]
    }
