"""Guía manual para sincronizar desde el dashboard de Algolia.

Alternativa a la sincronización por API cuando no hay credenciales a mano:
explica los pasos y ofrece abrir el dashboard en el navegador.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.rule import Rule

from adapters.terminal_prompt import TerminalPrompter, stdin_is_tty
from core.config import SyncSettings
from core.errors import setup_instructions

_console = Console()


async def _ask_open_dashboard() -> bool:
    async with TerminalPrompter(_console) as prompter:
        return await prompter.confirm("Open Algolia dashboard now? (y/n): ")


def open_url(url: str) -> None:
    if typer.launch(url) != 0:
        _console.print(f"\nOpen manually: {url}\n", highlight=False)


def guide() -> None:
    """Show how to run or configure the crawler from the Algolia dashboard."""

    settings = SyncSettings()

    _console.print("[bold]Algolia Sync[/bold]\n")
    _console.print(Rule())
    _console.print("\nInstructions to sync Algolia indices:\n")

    _console.print("[bold]Option A:[/bold] Use the Algolia Dashboard (Recommended)")
    _console.print("   - The crawler must be previously configured")
    _console.print("   - Go to the dashboard and run the crawler manually\n")

    if stdin_is_tty() and asyncio.run(_ask_open_dashboard()):
        _console.print("\nOpening Algolia dashboard...\n")
        open_url(settings.dashboard_url)

    _console.print("\n[bold]Option B:[/bold] Configure the crawler for the first time")
    for line in setup_instructions(index_name=settings.index_name, start_url=settings.start_url):
        _console.print(f"   {line}" if line else "", highlight=False)

    _console.print("\n[bold]Option C:[/bold] Use the API directly")
    _console.print("   Run: crawler-sync\n")

    _console.print(Rule())
    _console.print(
        "\nTip: Once configured, you can run the crawler from the dashboard "
        "every time you update the documentation.\n"
    )
