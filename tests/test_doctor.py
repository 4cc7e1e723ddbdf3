"""Tests for the doctor diagnostics commands."""

import httpx
from typer.testing import CliRunner

import cli.doctor as doctor
from adapters.http_client import build_client
from adapters.recommender_api import RecommenderClient
from cli.main import app
from core.config import get_user_env_file

runner = CliRunner()


def _mock_client(handler):
    def factory(settings):
        return RecommenderClient(
            settings,
            http_client=build_client(settings, transport=httpx.MockTransport(handler)),
        )

    return factory


def test_doctor_run_reports_reachable_api(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://recommender.test")
    monkeypatch.setenv("API_KEY", "secret-key")
    monkeypatch.setattr(
        doctor,
        "RecommenderClient",
        _mock_client(lambda r: httpx.Response(200, json={"modelNames": ["a", "b"]})),
    )

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "API reachability" in result.stdout
    assert "2 models available" in result.stdout


def test_doctor_run_fails_on_api_error(monkeypatch):
    monkeypatch.setenv("BASE_URL", "https://recommender.test")
    monkeypatch.setenv("API_KEY", "secret-key")
    monkeypatch.setattr(
        doctor,
        "RecommenderClient",
        _mock_client(lambda r: httpx.Response(503, text="unavailable")),
    )

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.stdout


def test_doctor_run_without_config():
    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.stdout


def test_doctor_setup_writes_user_env():
    result = runner.invoke(
        app,
        ["doctor", "setup"],
        input="https://recommender.test\napi_key\nsecret-key\n",
    )

    assert result.exit_code == 0, result.output
    text = get_user_env_file().read_text(encoding="utf-8")
    assert "BASE_URL=https://recommender.test" in text
    assert "AUTH_MODE=api_key" in text
    assert "API_KEY=secret-key" in text


def test_doctor_setup_with_adc():
    result = runner.invoke(
        app,
        ["doctor", "setup"],
        input="https://recommender.test\nadc\nmy-project\n",
    )

    assert result.exit_code == 0, result.output
    text = get_user_env_file().read_text(encoding="utf-8")
    assert "PROJECT_ID=my-project" in text
    assert "API_KEY" not in text


def test_doctor_setup_rejects_blank_base_url_before_next_prompt():
    result = runner.invoke(app, ["doctor", "setup"], input="   \n")

    assert result.exit_code != 0
    assert "base URL is required" in result.output
    assert "Auth mode" not in result.output
    assert not get_user_env_file().exists()
