"""Modelos del dominio de la sincronización.

Por qué:
- Credenciales, crawlers remotos y el resultado del run como datos puros
  (Pydantic v2).
- El dominio no conoce httpx ni Typer: solo conceptos del problema.
"""
