from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from campaign_analyzer.core.config import Settings
from campaign_analyzer.main import app
from campaign_analyzer.services.analysis_service import AnalysisService, get_analysis_service


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, error))

    @property
    def calls(self):
        return self.chat.completions.calls


@pytest.fixture
def settings():
    return Settings(OPENAI_API_KEY="test-key", OPENAI_MODEL="gpt-4o", OPENAI_MAX_TOKENS=1000, MOCK_ANALYSIS=False)


@pytest.fixture
def use_provider(settings):
    """Install a fake provider reply; returns the fake so tests can inspect calls."""
    def install(content=None, error=None, **overrides):
        fake = FakeOpenAI(content=content, error=error)
        service_settings = settings.model_copy(update=overrides)
        app.dependency_overrides[get_analysis_service] = lambda: AnalysisService(service_settings, fake)
        return fake

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def image_bytes():
    return b"\x89PNG\r\n\x1a\nfake-image-bytes"
