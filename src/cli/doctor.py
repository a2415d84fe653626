"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

from rich.console import Console

from adapters.crawler_api import CrawlerApiClient, normalize_crawler_listing
from adapters.http_client import build_async_client, send_request
from cli.ui_components import build_checks_table
from core.config import SyncSettings
from core.domain.models import Credentials
from core.errors import TransportError
from core.services.credentials import credentials_from_settings, redact_key

_console = Console()

_VARIABLES = (
    ("CRAWLER_USER_ID", "crawler_user_id"),
    ("CRAWLER_API_KEY", "crawler_api_key"),
    ("ALGOLIA_APP_ID", "algolia_app_id"),
    ("ALGOLIA_API_KEY", "algolia_api_key"),
    ("ALGOLIA_SEARCH_API_KEY", "algolia_search_api_key"),
)


async def _check_host(settings: SyncSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await send_request(
                client,
                host=settings.crawler_api_host,
                path="/",
                method="GET",
                headers={},
            )
        return True, f"HTTP {response.status}"
    except TransportError as exc:
        return False, exc.details[0] if exc.details else exc.title


async def _check_access(settings: SyncSettings, credentials: Credentials) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await CrawlerApiClient(client, settings).list_crawlers(credentials)
    except TransportError as exc:
        return False, exc.title

    if response.status in (401, 403):
        return False, f"HTTP {response.status} Unauthorized"
    crawlers = normalize_crawler_listing(response.body) if response.status == 200 else None
    if crawlers is None:
        return False, f"HTTP {response.status}"
    return True, f"{len(crawlers)} crawler(s) visible"


def doctor() -> None:
    """Run baseline diagnostics (never prints secret values)."""

    settings = SyncSettings()

    table = build_checks_table("crawler-sync Doctor")

    # Config
    for env_name, field_name in _VARIABLES:
        value = getattr(settings, field_name)
        table.add_row(env_name, "SET" if value else "NOT SET", "")

    credentials = credentials_from_settings(settings)
    if credentials is None:
        table.add_row("Credentials", "FAIL", "No usable pair; run `crawler-sync guide`")
    else:
        preview = redact_key(credentials.api_key)
        table.add_row(
            "Credentials",
            "OK",
            f"{credentials.scheme_label} ({credentials.identity}, key {preview})",
        )
    table.add_row("Index token", "OK", settings.index_name)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_host(settings))
    table.add_row("Crawler host", "OK" if ok_http else "FAIL", detail_http)

    if credentials is not None and ok_http:
        ok_access, detail_access = asyncio.run(_check_access(settings, credentials))
        table.add_row("Crawler API access", "OK" if ok_access else "FAIL", detail_access)

    _console.print(table)

    if credentials is None:
        _console.print(
            "\n[yellow]Note:[/yellow] Set CRAWLER_USER_ID + CRAWLER_API_KEY (recommended) "
            "or ALGOLIA_APP_ID + ALGOLIA_API_KEY in your .env file."
        )
