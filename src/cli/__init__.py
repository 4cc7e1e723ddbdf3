"""Capa de presentación (Typer + Rich).

Por qué separada:
- Los comandos solo traducen flags a llamadas del cliente y errores a exit codes.
"""
