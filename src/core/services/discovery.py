"""Descubrimiento del crawler que corresponde a este sitio.

Selección (gana la primera regla que aplique):
1. Un crawler cuyo índice o nombre contiene el token del sitio.
2. Si hay exactamente un crawler, ese.
3. Sin TTY: el primero del listado (reproducible en CI).
4. Con TTY: el operador elige por número; vacío o fuera de rango → el primero.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from adapters.crawler_api import normalize_crawler_listing
from adapters.http_client import HttpResponse
from core.config import SyncSettings
from core.domain.models import CrawlerSummary, Credentials, RunMode
from core.errors import AuthenticationFailed, DiscoveryFailed, NoCrawlerConfigured
from core.interfaces.prompt import Prompter


class CrawlerLister(Protocol):
    async def list_crawlers(self, credentials: Credentials) -> HttpResponse: ...


def find_site_crawler(crawlers: Sequence[CrawlerSummary], token: str) -> CrawlerSummary | None:
    return next((crawler for crawler in crawlers if crawler.matches(token)), None)


def parse_choice(answer: str, count: int) -> int:
    """Índice 0-based elegido; vacío, inválido o fuera de rango → 0."""

    answer = answer.strip()
    if not answer:
        return 0
    try:
        index = int(answer) - 1
    except ValueError:
        return 0
    if 0 <= index < count:
        return index
    return 0


async def select_crawler(
    crawlers: Sequence[CrawlerSummary],
    *,
    token: str,
    mode: RunMode,
    prompter: Prompter | None,
    console: Console,
) -> CrawlerSummary:
    """Aplica las reglas de selección sobre una lista no vacía."""

    if not crawlers:
        raise ValueError("select_crawler() requires at least one crawler")

    match = find_site_crawler(crawlers, token)
    if match is not None:
        console.print(f"[green]✓[/green] Found crawler: {escape(match.label())}\n")
        return match

    console.print(f"[cyan]ℹ[/cyan]  Found {len(crawlers)} crawler(s).")
    if len(crawlers) == 1:
        console.print(f"[green]✓[/green] Using: {escape(crawlers[0].label())}\n")
        return crawlers[0]

    if not mode.is_interactive or prompter is None:
        console.print(f"[green]✓[/green] Using first crawler: {escape(crawlers[0].label())}\n")
        return crawlers[0]

    console.print("\nAvailable crawlers:")
    for position, crawler in enumerate(crawlers, start=1):
        console.print(f"  {position}. {escape(crawler.label())}", highlight=False)
    answer = await prompter.ask(
        "\nSelect the crawler number to use (or Enter for the first one): "
    )
    chosen = crawlers[parse_choice(answer, len(crawlers))]
    console.print(f"[green]✓[/green] Using: {escape(chosen.label())}\n")
    return chosen


def interpret_listing(response: HttpResponse, settings: SyncSettings) -> list[CrawlerSummary]:
    """Traduce la respuesta del listado a crawlers o al error que corresponda."""

    if response.status in (401, 403):
        raise AuthenticationFailed.from_response(response.status, response.body)
    if response.status == 200:
        crawlers = normalize_crawler_listing(response.body)
        if crawlers is None:
            raise DiscoveryFailed.from_response(response.status, response.body)
        if not crawlers:
            raise NoCrawlerConfigured.with_setup_steps(
                index_name=settings.index_name, start_url=settings.start_url
            )
        return crawlers
    raise DiscoveryFailed.from_response(response.status, response.body)


async def discover_crawler(
    api: CrawlerLister,
    credentials: Credentials,
    settings: SyncSettings,
    *,
    mode: RunMode,
    prompter: Prompter | None,
    console: Console,
) -> str:
    """Lista los crawlers remotos y devuelve el id del elegido."""

    console.print("[bold]Searching for configured crawlers...[/bold]\n")
    response = await api.list_crawlers(credentials)
    crawlers = interpret_listing(response, settings)
    chosen = await select_crawler(
        crawlers,
        token=settings.index_name,
        mode=mode,
        prompter=prompter,
        console=console,
    )
    return chosen.id
