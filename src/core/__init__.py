"""Core: configuración, errores, logging, dominio e interfaces.

El Core no importa httpx ni google-auth; eso vive en `adapters`.
"""
