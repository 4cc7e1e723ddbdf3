"""Adaptadores de credenciales (implementan `CredentialProvider`).

Variantes:
- `ApplicationDefaultCredentials`: token OAuth2 obtenido con google-auth
  (ADC: env var, fichero well-known o metadata server) + header
  `X-Goog-User-Project`.
- `ApiKeyCredentials`: `key=<API_KEY>` en la query de cada petición.
"""

from __future__ import annotations

from typing import Any

import google.auth
from google.auth.exceptions import DefaultCredentialsError, GoogleAuthError
from google.auth.transport.requests import Request as GoogleAuthRequest

from core.config import AppSettings
from core.domain.auth_mode import AuthMode
from core.errors import ConfigurationError, CredentialsError
from core.interfaces.credentials import CredentialProvider
from core.logging_setup import get_logger

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

log = get_logger("credentials")


def find_default_credentials(scopes: tuple[str, ...] = (CLOUD_PLATFORM_SCOPE,)) -> Any:
    """Busca Application Default Credentials.

    Raises:
        ConfigurationError: si no hay ninguna fuente de credenciales disponible.
    """

    try:
        credentials, detected_project = google.auth.default(scopes=list(scopes))
    except DefaultCredentialsError as exc:
        raise ConfigurationError(f"Error finding default credentials: {exc}") from exc
    log.debug("Using default credentials (detected project: %s)", detected_project)
    return credentials


class ApplicationDefaultCredentials(CredentialProvider):
    """Bearer token de ADC; el token se refresca solo cuando deja de ser válido."""

    mode = AuthMode.ADC

    def __init__(self, project_id: str, credentials: Any | None = None) -> None:
        if not project_id:
            raise ConfigurationError("PROJECT_ID environment variable not set")
        self._project_id = project_id
        self._credentials = credentials if credentials is not None else find_default_credentials()

    @property
    def project_id(self) -> str:
        return self._project_id

    def auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token()}",
            "X-Goog-User-Project": self._project_id,
        }

    def auth_params(self) -> dict[str, str]:
        return {}

    def _access_token(self) -> str:
        if not self._credentials.valid:
            log.debug("Refreshing access token")
            try:
                self._credentials.refresh(GoogleAuthRequest())
            except GoogleAuthError as exc:
                raise CredentialsError(f"Error refreshing access token: {exc}") from exc
        return str(self._credentials.token)


class ApiKeyCredentials(CredentialProvider):
    mode = AuthMode.API_KEY

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ConfigurationError("API_KEY environment variable not set")
        self._api_key = api_key

    def auth_headers(self) -> dict[str, str]:
        return {}

    def auth_params(self) -> dict[str, str]:
        return {"key": self._api_key}


def build_credentials(settings: AppSettings) -> CredentialProvider:
    """Elige la variante de credenciales según la configuración validada."""

    mode = settings.resolved_auth_mode
    log.debug("Auth mode: %s", mode.label())
    if mode is AuthMode.API_KEY:
        return ApiKeyCredentials(settings.api_key or "")
    return ApplicationDefaultCredentials(settings.project_id or "")
