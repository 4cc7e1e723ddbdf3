"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Se valida una sola vez al arrancar; los adaptadores reciben un
  `AppSettings` explícito en vez de leer `os.environ` por su cuenta.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.auth_mode import AuthMode
from core.errors import ConfigurationError

APP_NAME = "recommender-cli"
APP_VERSION = "0.1.0"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` o vacíos se ignoran (no borran lo existente).
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# recommender-cli user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.

    Las variables no llevan prefijo: `BASE_URL`, `PROJECT_ID`, `API_KEY`...
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        ...,
        description="URL base del Recommender API (sin path de versión).",
    )
    project_id: str | None = Field(
        default=None,
        description="Proyecto de facturación/cuota (header X-Goog-User-Project).",
    )
    api_key: str | None = Field(
        default=None,
        description="API key; si está presente se envía como `key=` en cada request.",
    )
    auth_mode: AuthMode = Field(
        default_factory=AuthMode.default,
        description="auto | adc | api_key.",
    )
    user_agent: str = Field(
        default=f"{APP_NAME}/{APP_VERSION}",
        min_length=1,
        description="User-Agent de las peticiones HTTP.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        url = value.strip().rstrip("/")
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"must be an http(s) URL, got {value!r}")
        return url

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"must be DEBUG, INFO, WARNING, ERROR or CRITICAL, got {value!r}")
        return level

    @model_validator(mode="after")
    def _check_credential_source(self) -> "AppSettings":
        if self.auth_mode is AuthMode.API_KEY and not self.api_key:
            raise ValueError("API_KEY environment variable not set (AUTH_MODE=api_key)")
        if self.auth_mode is AuthMode.ADC and not self.project_id:
            raise ValueError("PROJECT_ID environment variable not set (AUTH_MODE=adc)")
        if self.auth_mode is AuthMode.AUTO and not (self.api_key or self.project_id):
            raise ValueError("either API_KEY or PROJECT_ID environment variable must be set")
        return self

    @property
    def resolved_auth_mode(self) -> AuthMode:
        """Variante efectiva: con `auto`, la API key tiene prioridad sobre ADC."""

        if self.auth_mode is not AuthMode.AUTO:
            return self.auth_mode
        return AuthMode.API_KEY if self.api_key else AuthMode.ADC


def _describe_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        msg = str(err.get("msg", "")).removeprefix("Value error, ")
        if loc and err.get("type") == "missing":
            messages.append(f"{str(loc[0]).upper()} environment variable not set")
        elif loc:
            messages.append(f"{str(loc[0]).upper()}: {msg}")
        else:
            messages.append(msg)
    return "; ".join(messages)


def load_settings(*, use_env_files: bool = True, **overrides: Any) -> AppSettings:
    """Carga y valida la configuración una sola vez.

    Orden de `.env`: proyecto primero (dev), luego config global de usuario.
    Los `overrides` (kwargs) tienen prioridad sobre el entorno.

    Raises:
        ConfigurationError: si falta `BASE_URL`, la fuente de credenciales o
            algún valor es inválido.
    """

    env_files = (".env", str(get_user_env_file())) if use_env_files else None
    try:
        return AppSettings(_env_file=env_files, **overrides)
    except ValidationError as exc:
        raise ConfigurationError(_describe_validation_error(exc)) from exc
