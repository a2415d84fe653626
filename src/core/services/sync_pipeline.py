"""Orquestación de la sincronización.

Máquina de estados lineal:
`Start -> ResolveCredentials -> DiscoverCrawler -> LaunchCrawler -> Done`.

Cualquier `SyncError` corta el flujo en `Failed`: se muestra el diagnóstico
con la acción sugerida y se devuelve un `SyncResult` fallido. La CLI solo
traduce el resultado a exit status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import httpx
from rich.console import Console

from adapters.crawler_api import CrawlerApiClient
from adapters.http_client import build_async_client
from core.config import SyncSettings
from core.domain.models import RunMode, SyncResult
from core.errors import SyncError
from core.interfaces.prompt import Prompter
from core.services.credentials import resolve_credentials
from core.services.discovery import discover_crawler
from core.services.launcher import launch_crawler

logger = logging.getLogger(__name__)


class SyncStage(str, Enum):
    START = "start"
    RESOLVE_CREDENTIALS = "resolve_credentials"
    DISCOVER_CRAWLER = "discover_crawler"
    LAUNCH_CRAWLER = "launch_crawler"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SyncHooks:
    """Optional callbacks for UI layers (failure rendering)."""

    failure: Callable[[SyncError], None] | None = None


def _enter(stage: SyncStage) -> SyncStage:
    logger.debug("Sync stage: %s", stage.value)
    return stage


async def run_sync(
    settings: SyncSettings,
    *,
    mode: RunMode,
    prompter: Prompter | None,
    console: Console,
    hooks: SyncHooks | None = None,
    client: httpx.AsyncClient | None = None,
) -> SyncResult:
    """Ejecuta una sincronización completa y devuelve su resultado terminal.

    Si no se pasa `client`, se crea uno y se cierra al terminar (también en
    caso de error inesperado).
    """

    hooks = hooks or SyncHooks()
    stage = _enter(SyncStage.START)
    crawler_id: str | None = None
    console.print("[bold]Syncing Algolia indices...[/bold]\n")

    owns_client = client is None
    http = client or build_async_client(settings)
    try:
        stage = _enter(SyncStage.RESOLVE_CREDENTIALS)
        credentials = await resolve_credentials(settings, mode, prompter, console)

        api = CrawlerApiClient(http, settings)
        stage = _enter(SyncStage.DISCOVER_CRAWLER)
        crawler_id = await discover_crawler(
            api,
            credentials,
            settings,
            mode=mode,
            prompter=prompter,
            console=console,
        )

        stage = _enter(SyncStage.LAUNCH_CRAWLER)
        result = await launch_crawler(api, credentials, crawler_id, settings, console)
    except SyncError as error:
        logger.debug("Sync failed during %s: %s", stage.value, error.title)
        _enter(SyncStage.FAILED)
        if hooks.failure:
            hooks.failure(error)
        else:
            console.print(error.render(), style="red", markup=False, highlight=False)
        return SyncResult(success=False, crawler_id=crawler_id, message=error.title)
    finally:
        if owns_client:
            await http.aclose()

    _enter(SyncStage.DONE)
    console.print("[green]✓[/green] Sync started successfully!")
    return result
