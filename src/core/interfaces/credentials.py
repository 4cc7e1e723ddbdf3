"""Contrato de credenciales para el Recommender API.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Las dos variantes (token bearer vía ADC y API key estática) se eligen al
  construir el cliente y son intercambiables en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.auth_mode import AuthMode


@runtime_checkable
class CredentialProvider(Protocol):
    """Contrato mínimo para autenticar una petición.

    Reglas de diseño:
    - `auth_headers` puede hacer I/O (refresco de token); es síncrono porque el
      cliente completo es síncrono.
    - `auth_params` devuelve parámetros que se añaden al final de la query.
    """

    mode: AuthMode

    def auth_headers(self) -> dict[str, str]:
        """Headers a añadir a cada petición."""

        ...

    def auth_params(self) -> dict[str, str]:
        """Parámetros de query a añadir a cada petición."""

        ...
