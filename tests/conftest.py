import pytest
from fastapi.testclient import TestClient

from plategenie.config import Settings, get_settings
from plategenie.core.dependencies import get_text_model
from plategenie.main import app

from tests.fakes import FakeTextModel


@pytest.fixture
def fake_model():
    return FakeTextModel()


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test", cors_origins=["*"])


@pytest.fixture
def client(fake_model, settings):
    app.dependency_overrides[get_text_model] = lambda: fake_model
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
