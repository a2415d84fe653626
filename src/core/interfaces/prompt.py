"""Contrato del prompt interactivo.

Por qué Protocol:
- Los servicios preguntan al operador sin saber si hay una terminal real,
  un test con respuestas guionizadas o un modo no interactivo.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Prompter(Protocol):
    """Pregunta/respuesta línea a línea.

    Reglas de diseño:
    - `ask` es asíncrono: el orquestador espera cada respuesta antes de
      seguir, nunca hay dos preguntas pendientes a la vez.
    - `confirm` acepta `y` (inglés) y `s` (español).
    """

    async def ask(self, question: str) -> str:
        """Lee una línea del operador (sin el salto de línea)."""

        ...

    async def confirm(self, question: str) -> bool:
        """Pregunta sí/no; True solo ante una respuesta afirmativa."""

        ...
