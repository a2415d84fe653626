"""Adaptador de la API del Algolia Crawler.

Fase 1:
- `GET /crawlers` para listar y `POST /crawlers/{id}/reindex` para lanzar.
- Ambos endpoints aceptan Basic auth (credenciales del Crawler) o los
  headers `X-Algolia-*` (credenciales estándar).

La normalización de la respuesta del listado vive aquí y solo aquí: si la
API vuelve a renombrar campos, este es el único sitio a tocar.
"""

from __future__ import annotations

import base64
from typing import Any
from urllib.parse import quote

import httpx

from adapters.http_client import HttpResponse, send_request
from core.config import SyncSettings
from core.domain.models import CrawlerCredentials, CrawlerSummary, Credentials

# Campo actual primero, luego el legacy.
_LISTING_FIELDS = ("items", "crawlers")


def basic_auth_header(user_id: str, api_key: str) -> str:
    token = base64.b64encode(f"{user_id}:{api_key}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def auth_headers(credentials: Credentials) -> dict[str, str]:
    """Headers de autenticación según la variante de credenciales."""

    headers = {"Content-Type": "application/json"}
    if isinstance(credentials, CrawlerCredentials):
        headers["Authorization"] = basic_auth_header(credentials.user_id, credentials.api_key)
    else:
        headers["X-Algolia-Application-Id"] = credentials.app_id
        headers["X-Algolia-API-Key"] = credentials.api_key
    return headers


def _index_names(raw: dict[str, Any]) -> frozenset[str]:
    names: set[str] = set()
    source = raw.get("source")
    if isinstance(source, dict) and isinstance(source.get("index"), str):
        names.add(source["index"])
    # Listados antiguos exponían el índice en la raíz.
    if isinstance(raw.get("index"), str):
        names.add(raw["index"])
    return frozenset(names)


def normalize_crawler_listing(payload: Any) -> list[CrawlerSummary] | None:
    """Convierte cualquier forma reconocida del listado en `CrawlerSummary`.

    Devuelve `None` si el payload no trae ninguna lista reconocible. Las
    entradas que no son objetos o no tienen `id` se descartan.
    """

    if not isinstance(payload, dict):
        return None

    raw_items: list[Any] | None = None
    for field_name in _LISTING_FIELDS:
        candidate = payload.get(field_name)
        if isinstance(candidate, list):
            raw_items = candidate
            break
    if raw_items is None:
        return None

    crawlers: list[CrawlerSummary] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        crawler_id = raw.get("id")
        if crawler_id in (None, ""):
            continue
        name = raw.get("name")
        crawlers.append(
            CrawlerSummary(
                id=str(crawler_id),
                name=name if isinstance(name, str) else "",
                index_names=_index_names(raw),
            )
        )
    return crawlers


class CrawlerApiClient:
    """Cliente fino sobre `send_request` para los endpoints del Crawler."""

    def __init__(self, client: httpx.AsyncClient, settings: SyncSettings | None = None) -> None:
        self._client = client
        self._settings = settings or SyncSettings()

    def _path(self, suffix: str) -> str:
        return f"{self._settings.crawler_api_prefix}{suffix}"

    async def list_crawlers(self, credentials: Credentials) -> HttpResponse:
        return await send_request(
            self._client,
            host=self._settings.crawler_api_host,
            path=self._path("/crawlers"),
            method="GET",
            headers=auth_headers(credentials),
        )

    async def reindex(
        self,
        credentials: Credentials,
        crawler_id: str,
    ) -> HttpResponse:
        return await send_request(
            self._client,
            host=self._settings.crawler_api_host,
            path=self._path(f"/crawlers/{quote(crawler_id, safe='')}/reindex"),
            method="POST",
            headers=auth_headers(credentials),
        )
