"""Prompt de terminal basado en Rich.

La lectura bloqueante corre en un hilo daemon que resuelve un
`asyncio.Future`. Cerrar el prompter cancela la lectura pendiente: el hilo
queda abandonado y no impide que el proceso termine.
"""

from __future__ import annotations

import asyncio
import os
import sys
import threading
from types import TracebackType
from typing import Callable

from rich.console import Console

from core.domain.language import is_affirmative

READER_THREAD_NAME = "crawler-sync-prompt"


def stdin_is_tty() -> bool:
    try:
        return sys.stdin is not None and sys.stdin.isatty()
    except ValueError:
        # stdin cerrado
        return False


def read_stdin_line() -> str:
    """Lee una línea del descriptor de stdin, byte a byte.

    No pasa por el buffer de `sys.stdin`: un hilo abandonado aquí no retiene
    su lock cuando el intérprete cierra stdin al salir.
    """

    fd = sys.stdin.fileno()
    data = bytearray()
    while True:
        chunk = os.read(fd, 1)
        if not chunk:
            if not data:
                raise EOFError("stdin closed")
            break
        if chunk == b"\n":
            break
        data += chunk
    encoding = getattr(sys.stdin, "encoding", None) or "utf-8"
    return data.decode(encoding, errors="replace").rstrip("\r")


def _settle(future: asyncio.Future[str], answer: str | None, error: Exception | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(answer or "")


class TerminalPrompter:
    """Implementa `core.interfaces.prompt.Prompter` sobre la consola."""

    def __init__(
        self,
        console: Console | None = None,
        read_line: Callable[[], str] | None = None,
    ) -> None:
        self._console = console or Console()
        self._read_line = read_line or read_stdin_line
        self._closed = False
        self._pending: asyncio.Future[str] | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def _reader(self, future: asyncio.Future[str], loop: asyncio.AbstractEventLoop) -> None:
        answer: str | None = None
        error: Exception | None = None
        try:
            answer = self._read_line()
        except Exception as exc:  # EOFError incluido: lo recibe quien espera
            error = exc
        try:
            loop.call_soon_threadsafe(_settle, future, answer, error)
        except RuntimeError:
            # Loop ya cerrado: nadie espera esta respuesta.
            return

    async def ask(self, question: str) -> str:
        if self._closed:
            raise RuntimeError("prompt interface is closed")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()
        self._pending = future
        self._console.print(question, end="", markup=False, highlight=False)
        threading.Thread(
            target=self._reader,
            args=(future, loop),
            name=READER_THREAD_NAME,
            daemon=True,
        ).start()
        try:
            answer = await future
        finally:
            self._pending = None
        return answer.strip()

    async def confirm(self, question: str) -> bool:
        return is_affirmative(await self.ask(question))

    def close(self) -> None:
        """Marca el prompter como cerrado y abandona la lectura en curso."""

        self._closed = True
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    async def __aenter__(self) -> "TerminalPrompter":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
