"""CLI de crawler-sync (Typer).

Sin argumentos ejecuta la sincronización; `doctor` y `guide` son
subcomandos de apoyo para el mantenedor.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.terminal_prompt import TerminalPrompter, stdin_is_tty
from cli.doctor import doctor
from cli.guide import guide
from cli.ui_components import build_error_panel, print_banner
from core.config import SyncSettings
from core.domain.models import RunMode, SyncResult
from core.services.sync_pipeline import SyncHooks, run_sync

app = typer.Typer(
    add_completion=False,
    help="Trigger a re-index of the documentation site in the Algolia Crawler.",
)
app.command(name="doctor")(doctor)
app.command(name="guide")(guide)

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=_console,
                rich_tracebacks=True,
                show_path=False,
                log_time_format="[%Y-%m-%d %H:%M:%S]",
            )
        ],
        force=True,
    )
    # httpx registra cada request en INFO; solo lo queremos en debug.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


async def _sync(settings: SyncSettings, mode: RunMode) -> SyncResult:
    hooks = SyncHooks(failure=lambda error: _err_console.print(build_error_panel(error)))
    async with TerminalPrompter(_console) as prompter:
        return await run_sync(
            settings,
            mode=mode,
            prompter=prompter,
            console=_console,
            hooks=hooks,
        )


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Sync the Algolia crawler for this site (default when no command is given)."""

    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = SyncSettings()
        configure_logging(settings.debug)
        mode = RunMode.detect(stdin_is_tty())
        if mode.is_interactive:
            print_banner(_console)
        result = asyncio.run(_sync(settings, mode))
    except Exception as exc:
        logger.debug("Unexpected failure", exc_info=exc)
        _err_console.print(f"\n[red]✗ Error during sync:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    raise typer.Exit(code=result.exit_code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
