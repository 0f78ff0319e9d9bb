"""Shared fixtures for the mentor service tests"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest

from interview_mentor.config import Settings


GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


def make_settings(tmp_path, **overrides):
    """Settings isolated from the developer's environment and .env"""
    values = {
        "groq_api_key": None,
        "api_key": None,
        "analytics_path": None,
        "mock_interview_seed": None,
        "sessions_dir": str(tmp_path / "sessions"),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def completion_with(content):
    """Object shaped like a groq ChatCompletion with a single choice"""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", content=content))]
    )


def fake_groq_client(content=None, side_effect=None):
    client = MagicMock()
    if side_effect is not None:
        client.chat.completions.create.side_effect = side_effect
    else:
        client.chat.completions.create.return_value = completion_with(content)
    return client


def groq_request():
    return httpx.Request("POST", GROQ_URL)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep GROQ_*, API_KEY and friends from the shell or a loaded .env out of every test"""
    for name in Settings.model_fields:
        monkeypatch.delenv(name.upper(), raising=False)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def keyed_settings(tmp_path):
    return make_settings(tmp_path, groq_api_key="test-key")
