"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from wbglance.config import ClientSettings, reset_settings
from wbglance.models import Credential

TEST_API_KEY = "0123456789abcdef0123456789abcdef01234567"


@pytest.fixture(autouse=True)
def clean_env_for_tests(monkeypatch):
    """Clean environment variables for test isolation.

    Ensures tests never read or write the user's real credential file and
    always start from default settings.
    """
    for name in ("WBGLANCE_CONFIG_DIR", "WBGLANCE_BASE_URL", "WBGLANCE_TIMEOUT", "WBGLANCE_CHART_MAX_POINTS", "WBGLANCE_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def credential() -> Credential:
    """A well-formed credential."""
    return Credential(api_key=TEST_API_KEY, entity="my-team")


@pytest.fixture
def settings() -> ClientSettings:
    """Settings pointing at a fake host."""
    return ClientSettings(base_url="https://tracker.example", timeout=5.0)


def make_response(status_code: int = 200, payload: Any = None, text: str | None = None) -> MagicMock:
    """Build a mock requests.Response.

    Args:
        status_code: HTTP status
        payload: Object returned by ``json()``
        text: Raw body; if given and not valid JSON, ``json()`` raises ValueError
    """
    response = MagicMock()
    response.status_code = status_code
    if text is not None:
        response.text = text
        try:
            decoded = json.loads(text)
        except ValueError:
            response.json.side_effect = ValueError("Expecting value")
        else:
            response.json.return_value = decoded
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def mock_session() -> MagicMock:
    """A mock requests.Session whose post() returns an empty data object."""
    session = MagicMock()
    session.post.return_value = make_response(payload={"data": {}})
    return session


@pytest.fixture(name="make_response")
def make_response_fixture():
    """Factory fixture for mock responses, see :func:`make_response`."""
    return make_response


@pytest.fixture
def api_key() -> str:
    """A well-formed API key."""
    return TEST_API_KEY
