"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2) y las funciones
  puras que las normalizan, ordenan y filtran.
- El dominio no conoce HTTP, CLI, ni httpx: solo conceptos del problema.
"""
