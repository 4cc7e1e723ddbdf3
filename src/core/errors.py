"""Errores del cliente del Recommender.

Por qué una jerarquía propia:
- La CLI captura un único tipo base (`RecommenderError`) y decide el exit code.
- Los adaptadores traducen excepciones de httpx/pydantic/google-auth a estos
  tipos, así el resto del código no depende de librerías de I/O.
"""

from __future__ import annotations


class RecommenderError(Exception):
    """Base de todos los errores del cliente."""


class ConfigurationError(RecommenderError):
    """Configuración ausente o inválida (env vars, credenciales)."""


class UrlConstructionError(RecommenderError):
    """No se pudo construir una URL válida a partir de la base y el path."""


class NetworkError(RecommenderError):
    """Fallo de transporte: DNS, conexión, timeout."""


class CredentialsError(RecommenderError):
    """No se pudo obtener o refrescar el token de acceso."""


class DecodeError(RecommenderError):
    """El cuerpo de la respuesta no es JSON o no encaja en el esquema esperado."""


class ApiError(RecommenderError):
    """Respuesta HTTP fuera del rango 2xx."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}: {body}")
