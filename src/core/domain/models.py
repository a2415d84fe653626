"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde: una credencial sin API key no puede existir.
- La unión discriminada de credenciales obliga a que cada run tenga
  exactamente una variante activa.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RunMode(str, Enum):
    """Modo de ejecución derivado del TTY en cada run (nunca persistido)."""

    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non_interactive"

    @classmethod
    def detect(cls, stdin_is_tty: bool) -> "RunMode":
        return cls.INTERACTIVE if stdin_is_tty else cls.NON_INTERACTIVE

    @property
    def is_interactive(self) -> bool:
        return self is RunMode.INTERACTIVE


class CrawlerCredentials(BaseModel):
    """Credenciales específicas del Crawler (opción recomendada)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["crawler"] = "crawler"
    user_id: str = Field(
        ...,
        min_length=1,
        description="User ID de https://crawler.algolia.com/admin/user/settings/.",
    )
    api_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="API key del Crawler (secreto).",
    )

    @property
    def scheme_label(self) -> str:
        return "Crawler-specific credentials"

    @property
    def identity(self) -> str:
        return self.user_id


class StandardCredentials(BaseModel):
    """Credenciales estándar de Algolia (Application ID + admin key)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["standard"] = "standard"
    app_id: str = Field(
        ...,
        min_length=1,
        description="Application ID de Algolia.",
    )
    api_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Admin API key (secreto).",
    )

    @property
    def scheme_label(self) -> str:
        return "standard Algolia credentials"

    @property
    def identity(self) -> str:
        return self.app_id


Credentials = Annotated[
    Union[CrawlerCredentials, StandardCredentials],
    Field(discriminator="kind"),
]


class CrawlerSummary(BaseModel):
    """Descriptor remoto de un crawler, normalizado desde la API.

    No pertenece a este proceso: se obtiene en cada run y no se cachea.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Identificador del crawler.")
    name: str = Field(default="", description="Nombre visible en el dashboard.")
    index_names: frozenset[str] = Field(
        default_factory=frozenset,
        description="Índices asociados (actuales y legacy).",
    )

    def matches(self, token: str) -> bool:
        """Coincidencia case-insensitive del token del sitio en índice o nombre."""

        needle = token.lower()
        if needle in self.name.lower():
            return True
        return any(needle in index.lower() for index in self.index_names)

    def label(self) -> str:
        return f"{self.name} (ID: {self.id})"


class SyncResult(BaseModel):
    """Resultado terminal de una invocación; solo decide el exit status."""

    model_config = ConfigDict(frozen=True)

    success: bool
    crawler_id: str | None = None
    message: str = ""
    monitor_url: str | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
