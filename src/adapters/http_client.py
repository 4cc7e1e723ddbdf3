"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza headers (User-Agent, Accept) para todas las llamadas al API.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Sin reintentos y con los timeouts por defecto de httpx: quien necesite
resiliencia debe envolver el cliente.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con los headers comunes."""

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(headers=headers, follow_redirects=True, transport=transport)
