"""Authentication modes supported by the recommender client.

This module centralizes the credential variants so that configuration,
adapters and the CLI share a single source of truth without creating
circular imports.
"""

from __future__ import annotations

from enum import Enum


class AuthMode(str, Enum):
    """How requests are authenticated against the Recommender API."""

    AUTO = "auto"
    ADC = "adc"
    API_KEY = "api_key"

    @classmethod
    def default(cls) -> "AuthMode":
        """Return the mode used when nothing is configured."""

        return cls.AUTO

    def label(self) -> str:
        """Human readable label for diagnostics and logging."""

        if self is AuthMode.ADC:
            return "Application Default Credentials (bearer token)"
        if self is AuthMode.API_KEY:
            return "API key (query parameter)"
        return "Automatic"
