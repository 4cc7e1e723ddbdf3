"""Cliente REST del AI Recommender API.

Responsabilidad:
- Construir la URL (base + `/v1alpha1/...` + query) y autenticarla con el
  `CredentialProvider` elegido al construir el cliente.
- Ejecutar un único GET síncrono y traducir fallos a `core.errors`.
- Validar el cuerpo directamente contra el esquema tipado del endpoint.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.credentials import build_credentials
from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import (
    AcceleratorRange,
    ListModelServersResponse,
    ListModelServerVersionsResponse,
    ListModelsResponse,
    ManifestBundle,
    Model,
    ModelAndServerPair,
    ModelServer,
    ModelServerVersion,
)
from core.errors import ApiError, DecodeError, NetworkError, UrlConstructionError
from core.interfaces.credentials import CredentialProvider
from core.logging_setup import get_logger

T = TypeVar("T")

API_PREFIX = "/v1alpha1"

_SECRET_HEADERS = frozenset({"authorization", "proxy-authorization", "x-goog-api-key", "cookie"})
_SECRET_PARAMS = frozenset({"key"})
_REDACTED = "REDACTED"

_LIST_MODELS = TypeAdapter(ListModelsResponse)
_LIST_MODEL_SERVERS = TypeAdapter(ListModelServersResponse)
_LIST_MODEL_SERVER_VERSIONS = TypeAdapter(ListModelServerVersionsResponse)
_ACCELERATOR_RANGE = TypeAdapter(AcceleratorRange)
_MANIFEST_BUNDLE = TypeAdapter(ManifestBundle)
_MODELS_AND_SERVERS = TypeAdapter(list[ModelAndServerPair])

log = get_logger("api")


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copia de los headers con los valores secretos ocultos."""

    return {
        name: (_REDACTED if name.lower() in _SECRET_HEADERS else value)
        for name, value in headers.items()
    }


def redact_url(url: httpx.URL) -> str:
    """URL con los parámetros secretos (`key=`) ocultos."""

    if not url.query:
        return str(url)
    params = [
        (name, _REDACTED if name in _SECRET_PARAMS else value)
        for name, value in url.params.multi_items()
    ]
    return str(url.copy_with(params=params))


def _dump_request(request: httpx.Request) -> str:
    lines = [f"{request.method} {redact_url(request.url)}"]
    for name, value in redact_headers(request.headers).items():
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


class RecommenderClient:
    """Cliente síncrono: una petición bloqueante por operación.

    Uso:
        with RecommenderClient(load_settings()) as client:
            models = client.list_models()
    """

    def __init__(
        self,
        settings: AppSettings,
        *,
        credentials: CredentialProvider | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = settings.base_url.rstrip("/")
        self._credentials = credentials if credentials is not None else build_credentials(settings)
        self._http = http_client if http_client is not None else build_client(settings)

    @property
    def credentials(self) -> CredentialProvider:
        return self._credentials

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "RecommenderClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------

    def list_models(self) -> list[Model]:
        response = self._get("/models", _LIST_MODELS)
        return [Model(name=name) for name in response.model_names]

    def list_model_servers(self, model_name: str) -> list[ModelServer]:
        response = self._get(
            "/modelServers",
            _LIST_MODEL_SERVERS,
            params={"model_name": model_name},
        )
        return [ModelServer(name=name) for name in response.model_server_names]

    def list_model_server_versions(
        self,
        model_name: str,
        model_server_name: str,
    ) -> list[ModelServerVersion]:
        response = self._get(
            f"/modelServers/{quote(model_server_name, safe='')}/versions",
            _LIST_MODEL_SERVER_VERSIONS,
            params={"model_name": model_name},
        )
        return [ModelServerVersion(name=name) for name in response.model_server_versions]

    def list_accelerators(self, model_name: str, model_server_name: str) -> AcceleratorRange:
        return self._get(
            "/accelerators",
            _ACCELERATOR_RANGE,
            params={"model_name": model_name, "model_server_name": model_server_name},
        )

    def create_manifest(
        self,
        model_name: str,
        model_server_name: str,
        model_server_version: str,
        accelerator_type: str,
        target_ntpot_milliseconds: int = 0,
    ) -> ManifestBundle:
        """Pide un manifest optimizado.

        `target_ntpot_milliseconds` solo se envía si es > 0.
        """

        params = {
            "model_and_model_server_info.model_name": model_name,
            "model_and_model_server_info.model_server_name": model_server_name,
            "model_and_model_server_info.model_server_version": model_server_version,
            "accelerator_type": accelerator_type,
        }
        if target_ntpot_milliseconds > 0:
            params["target_ntpot_milliseconds"] = str(target_ntpot_milliseconds)
        return self._get("/optimizedManifest", _MANIFEST_BUNDLE, params=params)

    def list_models_and_servers(self) -> list[ModelAndServerPair]:
        return self._get("/modelsAndServers", _MODELS_AND_SERVERS)

    # ------------------------------------------------------------------
    # Transporte
    # ------------------------------------------------------------------

    def _build_url(self, path: str, params: Mapping[str, str]) -> httpx.URL:
        query = dict(params)
        query.update(self._credentials.auth_params())
        try:
            return httpx.URL(f"{self._base_url}{API_PREFIX}{path}", params=query)
        except httpx.InvalidURL as exc:
            raise UrlConstructionError(f"Error parsing URL: {exc}") from exc

    def _get(
        self,
        path: str,
        adapter: TypeAdapter[T],
        *,
        params: Mapping[str, str] | None = None,
    ) -> T:
        url = self._build_url(path, params or {})
        request = self._http.build_request("GET", url, headers=self._credentials.auth_headers())
        log.debug("GET %s", redact_url(request.url))

        try:
            response = self._http.send(request)
        except httpx.RequestError as exc:
            raise NetworkError(f"Error making request: {exc}") from exc

        log.debug("HTTP %s from %s", response.status_code, request.url.path)
        if not response.is_success:
            log.warning("Request headers on error:\n%s", _dump_request(request))
            raise ApiError(response.status_code, response.text)

        try:
            return adapter.validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"Error decoding response: {exc}") from exc
