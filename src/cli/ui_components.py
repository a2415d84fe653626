"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles entre `sync` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.errors import SyncError

_STAGE_TITLES = {
    "credentials": "Credentials",
    "discovery": "Crawler discovery",
    "launch": "Crawler launch",
    "transport": "Network",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Solo en modo interactivo: en CI la salida queda limpia para los logs.
    """

    title = Text("crawler-sync", style="bold cyan")
    subtitle = Text("Algolia Crawler re-index for the logget docs", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_error_panel(error: SyncError) -> Panel:
    """Panel rojo con qué falló, por qué y qué hacer."""

    body = Text()
    body.append(error.title + "\n", style="bold red")
    for line in error.details:
        body.append(f"   {line}\n" if line else "\n")
    if error.remediation:
        body.append("\n")
        for line in error.remediation:
            body.append(line + "\n", style="yellow")

    title = Text(f"✗ {_STAGE_TITLES.get(error.stage, 'Sync')} failed", style="bold red")
    return Panel(body, title=title, border_style="red")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
