"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los registros que devuelve el Recommender (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni credenciales: solo conceptos del problema.
"""
