"""Contratos (Protocol) del Core.

Por qué:
- Los servicios dependen de `Prompter`, no de la terminal concreta, así los
  tests pueden responder con guiones.
"""
