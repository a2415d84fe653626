"""Taxonomía de errores de la sincronización.

Cada error es terminal para el run actual y nunca se reintenta. Lleva el
texto que ve el operador: qué falló (`title`), por qué (`details`, incluido
el diagnóstico crudo del servidor) y qué hacer (`remediation`).
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from core.config import CRAWLER_SETTINGS_URL, DASHBOARD_URL


def format_body(body: Any) -> str:
    """Cuerpo de respuesta tal cual: texto crudo o JSON indentado."""

    if isinstance(body, str):
        return body
    return json.dumps(body, indent=2, ensure_ascii=False)


class SyncError(Exception):
    """Base exception for every crawler-sync failure."""

    stage = "sync"

    def __init__(
        self,
        title: str,
        *,
        details: Iterable[str] = (),
        remediation: Iterable[str] = (),
    ) -> None:
        self.title = title
        self.details = list(details)
        self.remediation = list(remediation)
        super().__init__(self.render())

    def render(self) -> str:
        lines = [self.title]
        lines.extend(f"   {line}" if line else "" for line in self.details)
        if self.remediation:
            lines.append("")
            lines.extend(self.remediation)
        return "\n".join(lines)


class MissingCredentials(SyncError):
    """No usable credential pair could be resolved."""

    stage = "credentials"

    @classmethod
    def no_api_key(cls) -> "MissingCredentials":
        return cls(
            "API Key is required to continue.",
            remediation=[
                "Option 1 (RECOMMENDED): Set Crawler-specific credentials in .env:",
                "   CRAWLER_USER_ID=your_crawler_user_id",
                "   CRAWLER_API_KEY=your_crawler_api_key",
                f"   Get them from: {CRAWLER_SETTINGS_URL}",
                "",
                "Option 2: Set standard Algolia credentials in .env:",
                "   ALGOLIA_APP_ID=your_application_id",
                "   ALGOLIA_API_KEY=your_admin_api_key",
                f"   Get them from: {DASHBOARD_URL} > Settings > API Keys",
            ],
        )

    @classmethod
    def no_app_id(cls) -> "MissingCredentials":
        return cls(
            "ALGOLIA_APP_ID is required when using standard credentials.",
            remediation=[
                "Set the ALGOLIA_APP_ID environment variable in your .env file.",
                "Or use Crawler-specific credentials (CRAWLER_USER_ID and CRAWLER_API_KEY)",
                f"   Get them from: {CRAWLER_SETTINGS_URL}",
            ],
        )


class AuthenticationFailed(SyncError):
    """The crawler API rejected the credentials (401/403)."""

    stage = "discovery"

    @classmethod
    def from_response(cls, status: int, body: Any) -> "AuthenticationFailed":
        details = [f"Status: {status}"]
        if isinstance(body, dict) and body.get("message"):
            details.append(f"Error message: {body['message']}")
        if isinstance(body, (dict, list)):
            details.append(f"Error details: {format_body(body)}")
        elif body:
            details.append(f"Error response: {body}")
        details.extend(
            [
                "",
                "Possible causes:",
                "1. The API key does not have permission to access crawlers",
                "2. The API key is not an Admin API Key or Crawler API Key",
                "3. The API key has ACL restrictions that block Crawler API access",
                "4. The Application ID does not match the API key",
            ]
        )
        return cls(
            "Authentication failed: Unauthorized",
            details=details,
            remediation=[
                "Solutions:",
                "1. Get Crawler-specific credentials (RECOMMENDED):",
                f"   - Go to: {CRAWLER_SETTINGS_URL}",
                '   - Copy your "User ID" and "API Key"',
                "   - Set CRAWLER_USER_ID and CRAWLER_API_KEY in your .env file",
                "",
                "2. OR use an Admin API Key with crawler permissions:",
                f"   - Go to: {DASHBOARD_URL} > Settings > API Keys",
                "   - Verify you are using an Admin API Key",
                "   - Check the ACL (Access Control List) of your API key",
                "   - Make sure the API key has crawler permissions enabled",
                "   - Verify ALGOLIA_APP_ID matches your Application ID",
            ],
        )


class NoCrawlerConfigured(SyncError):
    """The account has no crawler at all."""

    stage = "discovery"

    @classmethod
    def with_setup_steps(cls, *, index_name: str, start_url: str) -> "NoCrawlerConfigured":
        return cls(
            "No configured crawlers found.",
            details=["You must configure the crawler first in the Algolia dashboard."],
            remediation=setup_instructions(index_name=index_name, start_url=start_url),
        )


class DiscoveryFailed(SyncError):
    """Listing crawlers failed for a reason other than authentication."""

    stage = "discovery"

    @classmethod
    def from_response(cls, status: int, body: Any) -> "DiscoveryFailed":
        details = [f"Status: {status}"]
        if body not in (None, ""):
            details.append(f"Response: {format_body(body)}")
        return cls(f"Error fetching crawlers (Status: {status})", details=details)


class LaunchFailed(SyncError):
    """The reindex trigger was not accepted."""

    stage = "launch"

    @classmethod
    def from_response(cls, crawler_id: str, status: int, body: Any) -> "LaunchFailed":
        return cls(
            f"Error starting crawler {crawler_id} (Status: {status})",
            details=[f"Response: {format_body(body)}"],
            remediation=[
                f"Check the crawler state at: {DASHBOARD_URL}/crawlers/{crawler_id}",
                "A reindex may already be running; wait for it to finish and retry.",
            ],
        )


class TransportError(SyncError):
    """DNS/connection-level failure: no HTTP status was received."""

    stage = "transport"

    @classmethod
    def from_exception(cls, url: str, exc: Exception) -> "TransportError":
        reason = str(exc) or exc.__class__.__name__
        return cls(
            f"Could not reach {url}",
            details=[f"Error: {reason}"],
            remediation=["Check your network connection (DNS, proxy, firewall) and retry."],
        )


def setup_instructions(*, index_name: str, start_url: str) -> list[str]:
    """Pasos para crear el crawler por primera vez en el dashboard."""

    return [
        "To configure the crawler:",
        f"1. Go to {DASHBOARD_URL}",
        '2. Go to "Crawlers" in the sidebar',
        '3. Create a new "Web Crawler"',
        "4. Configure:",
        f"   - Index name: {index_name}",
        f"   - Start URL: {start_url}",
        "5. Import the configuration from .algolia/algolia-config.json (if available)",
        "",
        "After configuring the crawler, get your Crawler credentials:",
        f"   - Go to: {CRAWLER_SETTINGS_URL}",
        '   - Copy your "User ID" and "API Key"',
        "   - Set CRAWLER_USER_ID and CRAWLER_API_KEY in your .env file",
    ]
