"""Lanzamiento del reindex (fire-and-forget, sin polling)."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape

from adapters.http_client import HttpResponse
from core.config import SyncSettings
from core.domain.models import Credentials, SyncResult
from core.errors import LaunchFailed

_ACCEPTED = (200, 201)


class CrawlerTrigger(Protocol):
    async def reindex(
        self,
        credentials: Credentials,
        crawler_id: str,
    ) -> HttpResponse: ...


async def launch_crawler(
    api: CrawlerTrigger,
    credentials: Credentials,
    crawler_id: str,
    settings: SyncSettings,
    console: Console,
) -> SyncResult:
    """Dispara el reindex; 200/201 es éxito, cualquier otro estado `LaunchFailed`."""

    console.print(f"[bold]Starting crawler (ID: {escape(crawler_id)})...[/bold]\n")
    response = await api.reindex(credentials, crawler_id)
    if response.status not in _ACCEPTED:
        raise LaunchFailed.from_response(crawler_id, response.status, response.body)

    monitor_url = settings.crawler_dashboard_url(crawler_id)
    console.print("[green]✓[/green] Crawler started successfully!\n")
    console.print("The indexing process may take several minutes.")
    console.print("You can monitor progress at:")
    console.print(f"   {monitor_url}\n", highlight=False)
    return SyncResult(
        success=True,
        crawler_id=crawler_id,
        message="Crawler started successfully",
        monitor_url=monitor_url,
    )
