"""Modelos y entidades del dominio.

- Aquí viven las estructuras de datos puras e inmutables (Pydantic v2) y el
  catálogo de modelos conocidos.
- El dominio no conoce HTTP, CLI ni SDKs.
"""
