"""Tests for credential provider selection."""

import google.auth
import pytest
from google.auth.exceptions import DefaultCredentialsError

from adapters.credentials import (
    CLOUD_PLATFORM_SCOPE,
    ApiKeyCredentials,
    ApplicationDefaultCredentials,
    build_credentials,
)
from core.config import load_settings
from core.domain.auth_mode import AuthMode
from core.errors import ConfigurationError
from core.interfaces.credentials import CredentialProvider

BASE_URL = "https://recommender.test"


def test_api_key_credentials_add_query_param():
    credentials = ApiKeyCredentials("secret-key")

    assert isinstance(credentials, CredentialProvider)
    assert credentials.mode is AuthMode.API_KEY
    assert credentials.auth_params() == {"key": "secret-key"}
    assert credentials.auth_headers() == {}


def test_api_key_credentials_require_value():
    with pytest.raises(ConfigurationError):
        ApiKeyCredentials("")


def test_build_credentials_prefers_api_key_in_auto_mode():
    settings = load_settings(use_env_files=False, base_url=BASE_URL, api_key="k", project_id="p")

    credentials = build_credentials(settings)

    assert isinstance(credentials, ApiKeyCredentials)


def test_build_credentials_uses_adc_with_project(monkeypatch, fake_google_credentials):
    calls = []

    def fake_default(scopes=None):
        calls.append(scopes)
        return fake_google_credentials(), "detected-project"

    monkeypatch.setattr(google.auth, "default", fake_default)
    settings = load_settings(use_env_files=False, base_url=BASE_URL, project_id="my-project")

    credentials = build_credentials(settings)

    assert isinstance(credentials, ApplicationDefaultCredentials)
    assert credentials.mode is AuthMode.ADC
    assert credentials.project_id == "my-project"
    assert calls == [[CLOUD_PLATFORM_SCOPE]]
    assert credentials.auth_headers() == {
        "Authorization": "Bearer ya29.cached",
        "X-Goog-User-Project": "my-project",
    }
    assert credentials.auth_params() == {}


def test_explicit_adc_mode_ignores_api_key(monkeypatch, fake_google_credentials):
    monkeypatch.setattr(google.auth, "default", lambda scopes=None: (fake_google_credentials(), None))
    settings = load_settings(
        use_env_files=False,
        base_url=BASE_URL,
        api_key="k",
        project_id="p",
        auth_mode="adc",
    )

    assert isinstance(build_credentials(settings), ApplicationDefaultCredentials)


def test_missing_default_credentials_is_configuration_error(monkeypatch):
    def no_credentials(scopes=None):
        raise DefaultCredentialsError("Could not automatically determine credentials.")

    monkeypatch.setattr(google.auth, "default", no_credentials)
    settings = load_settings(use_env_files=False, base_url=BASE_URL, project_id="my-project")

    with pytest.raises(ConfigurationError, match="default credentials"):
        build_credentials(settings)
