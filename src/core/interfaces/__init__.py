"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores de credenciales.
- El cliente HTTP depende de la abstracción, no de google-auth.
"""
