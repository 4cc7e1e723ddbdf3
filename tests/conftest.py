"""Shared fixtures: isolated environment and mock-transport clients."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

import core.config
from adapters.credentials import ApiKeyCredentials
from adapters.http_client import build_client
from adapters.recommender_api import RecommenderClient
from core.config import AppSettings, load_settings
from core.logging_setup import get_logger

BASE_URL = "https://recommender.test"

_ENV_VARS = ("BASE_URL", "PROJECT_ID", "API_KEY", "AUTH_MODE", "LOG_LEVEL", "USER_AGENT")


class FakeGoogleCredentials:
    """Stand-in for google.auth credentials (token/valid/refresh)."""

    def __init__(self, token: str = "ya29.cached", valid: bool = True, refresh_error: Exception | None = None):
        self.token = token
        self.valid = valid
        self.refresh_calls = 0
        self._refresh_error = refresh_error

    def refresh(self, request: Any) -> None:
        self.refresh_calls += 1
        if self._refresh_error is not None:
            raise self._refresh_error
        self.token = "ya29.refreshed"
        self.valid = True


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No real env vars, no project .env, user config dir under tmp_path."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    config_dir = tmp_path / "user-config"
    monkeypatch.setattr(core.config, "get_user_config_dir", lambda: config_dir)
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams that die with the test (CliRunner, StringIO)."""
    yield
    logger = get_logger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def settings() -> AppSettings:
    return load_settings(use_env_files=False, base_url=BASE_URL, api_key="secret-key")


@pytest.fixture
def fake_google_credentials():
    return FakeGoogleCredentials


@pytest.fixture
def make_client(settings) -> Callable[..., RecommenderClient]:
    """Build a client whose transport is `handler`; requests are recorded on `client.requests`."""

    def factory(handler, credentials=None, client_settings: AppSettings | None = None) -> RecommenderClient:
        active = client_settings or settings
        recorded: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return handler(request)

        client = RecommenderClient(
            active,
            credentials=credentials or ApiKeyCredentials(active.api_key or "secret-key"),
            http_client=build_client(active, transport=httpx.MockTransport(recording_handler)),
        )
        client.requests = recorded  # type: ignore[attr-defined]
        return client

    return factory
