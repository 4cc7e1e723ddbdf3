"""Adaptadores de I/O: HTTP (httpx) y credenciales (google-auth)."""
