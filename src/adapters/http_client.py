"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza headers y la semántica de "una sola petición": sin redirects,
  sin reintentos y con el timeout por defecto de httpx.
- Facilita testeo: se puede sustituir por un cliente mockeado (respx).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from core.config import SyncSettings
from core.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Estado HTTP + cuerpo ya decodificado (JSON o texto crudo)."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def build_async_client(settings: SyncSettings | None = None) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` para la API del Crawler.

    Por qué un builder:
    - Centraliza headers para que listado y reindex se comporten igual.
    - No sigue redirects: cada llamada es exactamente una petición.
    """

    settings = settings or SyncSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(follow_redirects=False, headers=headers)


def decode_body(response: httpx.Response) -> Any:
    """JSON si se puede; si no, el texto tal cual. Nunca lanza."""

    try:
        return response.json()
    except ValueError:
        return response.text


async def send_request(
    client: httpx.AsyncClient,
    *,
    host: str,
    path: str,
    method: str,
    headers: dict[str, str],
) -> HttpResponse:
    """Ejecuta una única petición HTTPS y devuelve `HttpResponse`.

    Los estados no-2xx se devuelven tal cual; solo los fallos de transporte
    (DNS, conexión, timeout) se convierten en `TransportError`.
    """

    url = f"https://{host}{path}"
    logger.debug("%s %s", method, url)
    try:
        response = await client.request(method, url, headers=headers)
    except httpx.HTTPError as exc:
        raise TransportError.from_exception(url, exc) from exc

    body = decode_body(response)
    logger.debug("%s %s -> HTTP %s", method, url, response.status_code)
    return HttpResponse(status=response.status_code, body=body)
