"""Resolución de credenciales con precedencia fija.

Orden:
1. `CRAWLER_USER_ID` + `CRAWLER_API_KEY` (recomendadas).
2. `ALGOLIA_APP_ID` + `ALGOLIA_API_KEY` / `ALGOLIA_SEARCH_API_KEY`.
3. En modo interactivo, preguntar al operador y resolver de nuevo una vez.
4. Si no, `MissingCredentials`.

La API key nunca se imprime: solo una vista previa redactada.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from core.config import SyncSettings
from core.domain.models import CrawlerCredentials, Credentials, RunMode, StandardCredentials
from core.errors import MissingCredentials
from core.interfaces.prompt import Prompter

logger = logging.getLogger(__name__)


def redact_key(api_key: str) -> str:
    """`abcd...wxyz` si la key tiene más de 8 caracteres; si no, `***`."""

    if len(api_key) > 8:
        return f"{api_key[:4]}...{api_key[-4:]}"
    return "***"


def _log_presence(settings: SyncSettings) -> None:
    def state(value: str | None) -> str:
        return "set" if value else "not set"

    logger.debug("Credentials check")
    logger.debug("  CRAWLER_USER_ID: %s", state(settings.crawler_user_id))
    logger.debug("  CRAWLER_API_KEY: %s", state(settings.crawler_api_key))
    logger.debug("  ALGOLIA_APP_ID: %s", state(settings.algolia_app_id))
    logger.debug("  ALGOLIA_API_KEY: %s", state(settings.algolia_api_key))
    logger.debug("  ALGOLIA_SEARCH_API_KEY: %s", state(settings.algolia_search_api_key))


def credentials_from_settings(settings: SyncSettings) -> Credentials | None:
    """Aplica la precedencia sobre la configuración, sin efectos secundarios."""

    if settings.crawler_user_id and settings.crawler_api_key:
        return CrawlerCredentials(
            user_id=settings.crawler_user_id,
            api_key=settings.crawler_api_key,
        )
    api_key = settings.standard_api_key
    if settings.algolia_app_id and api_key:
        return StandardCredentials(app_id=settings.algolia_app_id, api_key=api_key)
    return None


def describe_credentials(credentials: Credentials, console: Console) -> None:
    console.print(f"[cyan]ℹ[/cyan]  Using {credentials.scheme_label}")
    if isinstance(credentials, CrawlerCredentials):
        console.print(f"[cyan]ℹ[/cyan]  Crawler User ID: {escape(credentials.user_id)}")
        label = "Crawler API Key"
    else:
        console.print(f"[cyan]ℹ[/cyan]  Application ID: {escape(credentials.app_id)}")
        label = "API Key"
    console.print(
        f"[cyan]ℹ[/cyan]  {label}: {redact_key(credentials.api_key)} "
        f"(length: {len(credentials.api_key)})",
        highlight=False,
    )


async def _prompt_for_credentials(
    settings: SyncSettings, prompter: Prompter, console: Console
) -> SyncSettings:
    console.print("[bold]Enter your Algolia credentials:[/bold]")
    console.print("   Option 1 (RECOMMENDED): Crawler-specific credentials")
    console.print(f"      Get them from: {settings.crawler_settings_url}")
    console.print("   Option 2: Admin API Key")
    console.print(f"      Get it from: {settings.dashboard_url} > Settings > API Keys\n")

    if await prompter.confirm("Use Crawler credentials? (y/n): "):
        user_id = settings.crawler_user_id or await prompter.ask("Crawler User ID: ")
        api_key = settings.crawler_api_key or await prompter.ask("Crawler API Key: ")
        return settings.model_copy(update={"crawler_user_id": user_id, "crawler_api_key": api_key})

    app_id = settings.algolia_app_id or await prompter.ask("Application ID: ")
    api_key = settings.standard_api_key or await prompter.ask("API Key: ")
    console.print("")
    return settings.model_copy(update={"algolia_app_id": app_id, "algolia_api_key": api_key})


async def resolve_credentials(
    settings: SyncSettings,
    mode: RunMode,
    prompter: Prompter | None,
    console: Console,
    *,
    allow_prompt: bool = True,
) -> Credentials:
    """Devuelve las credenciales a usar o lanza `MissingCredentials`.

    En modo interactivo y sin un par completo, pregunta al operador y vuelve
    a resolver exactamente una vez (`allow_prompt=False` en la recursión).
    """

    if settings.debug:
        _log_presence(settings)

    credentials = credentials_from_settings(settings)
    if credentials is not None:
        describe_credentials(credentials, console)
        console.print("")
        return credentials

    if allow_prompt and mode.is_interactive and prompter is not None:
        supplied = await _prompt_for_credentials(settings, prompter, console)
        return await resolve_credentials(
            supplied, mode, prompter, console, allow_prompt=False
        )

    if settings.standard_api_key:
        raise MissingCredentials.no_app_id()
    raise MissingCredentials.no_api_key()
