"""Modelos y reglas puras del dominio.

Por qué:
- Aquí viven las estructuras de datos inmutables (Pydantic v2) y el
  clasificador SemVer.
- El dominio no conoce HTTP, CLI, ni GraphQL: solo paquetes y versiones.
"""
