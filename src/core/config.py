"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Se construye una sola vez al arrancar y se pasa explícitamente a cada
  servicio, así la precedencia de credenciales es testeable sin tocar
  `os.environ`.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_FALSY_FLAGS = {"", "0", "false", "no", "off"}

CRAWLER_SETTINGS_URL = "https://crawler.algolia.com/admin/user/settings/"
DASHBOARD_URL = "https://www.algolia.com/dashboard"
CRAWLER_API_HOST = "crawler.algolia.com"
CRAWLER_API_PREFIX = "/api/1"
USER_AGENT = "crawler-sync/0.1"


class SyncSettings(BaseSettings):
    """Configuración central del comando de sincronización.

    Las credenciales usan los nombres de variable históricos (sin prefijo);
    los ajustes propios de la herramienta usan `CRAWLER_SYNC_`.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    crawler_user_id: str | None = Field(
        default=None,
        validation_alias="CRAWLER_USER_ID",
        description="User ID del Crawler (credenciales recomendadas).",
    )
    crawler_api_key: str | None = Field(
        default=None,
        validation_alias="CRAWLER_API_KEY",
        description="API key del Crawler.",
    )
    algolia_app_id: str | None = Field(
        default=None,
        validation_alias="ALGOLIA_APP_ID",
        description="Application ID de Algolia (credenciales estándar).",
    )
    algolia_api_key: str | None = Field(
        default=None,
        validation_alias="ALGOLIA_API_KEY",
        description="Admin API key de Algolia.",
    )
    algolia_search_api_key: str | None = Field(
        default=None,
        validation_alias="ALGOLIA_SEARCH_API_KEY",
        description="Alternativa aceptada a ALGOLIA_API_KEY.",
    )
    debug: bool = Field(
        default=False,
        validation_alias="DEBUG",
        description="Logging detallado de presencia de credenciales (nunca valores).",
    )

    index_name: str = Field(
        default="logget",
        min_length=1,
        validation_alias="CRAWLER_SYNC_INDEX_NAME",
        description="Token del índice del sitio usado para elegir el crawler.",
    )
    start_url: str = Field(
        default="https://enegalan.github.io/logget-doc/",
        min_length=8,
        validation_alias="CRAWLER_SYNC_START_URL",
        description="URL inicial del sitio (solo para instrucciones de setup).",
    )

    # Fijos: no se leen del entorno ni de `.env` (las credenciales solo viajan a este host).
    crawler_api_host: ClassVar[str] = CRAWLER_API_HOST
    crawler_api_prefix: ClassVar[str] = CRAWLER_API_PREFIX
    crawler_settings_url: ClassVar[str] = CRAWLER_SETTINGS_URL
    dashboard_url: ClassVar[str] = DASHBOARD_URL
    user_agent: ClassVar[str] = USER_AGENT

    @field_validator(
        "crawler_user_id",
        "crawler_api_key",
        "algolia_app_id",
        "algolia_api_key",
        "algolia_search_api_key",
        mode="before",
    )
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("debug", mode="before")
    @classmethod
    def _any_value_enables_debug(cls, value: Any) -> Any:
        # DEBUG=* or DEBUG=crawler are common; only explicit negatives disable it.
        if isinstance(value, str):
            return value.strip().lower() not in _FALSY_FLAGS
        return value

    @property
    def standard_api_key(self) -> str | None:
        """Primera API key estándar no vacía (ALGOLIA_API_KEY gana)."""

        return self.algolia_api_key or self.algolia_search_api_key

    def crawler_dashboard_url(self, crawler_id: str) -> str:
        return f"{self.dashboard_url}/crawlers/{crawler_id}"
