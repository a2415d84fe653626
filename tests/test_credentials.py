import logging

import pytest

from core.domain.models import CrawlerCredentials, RunMode, StandardCredentials
from core.errors import MissingCredentials
from core.services.credentials import credentials_from_settings, redact_key, resolve_credentials


@pytest.mark.parametrize(
    "standard",
    [
        {},
        {"algolia_app_id": "APP"},
        {"algolia_app_id": "APP", "algolia_api_key": "admin-key-1234"},
        {"algolia_app_id": "APP", "algolia_search_api_key": "search-key-1234"},
    ],
)
def test_crawler_pair_wins_over_standard_variables(make_settings, standard):
    settings = make_settings(crawler_user_id="abc", crawler_api_key="xyz12345", **standard)

    credentials = credentials_from_settings(settings)

    assert credentials == CrawlerCredentials(user_id="abc", api_key="xyz12345")


def test_standard_pair_with_search_key(make_settings):
    settings = make_settings(algolia_app_id="APP", algolia_search_api_key="search-key")

    assert credentials_from_settings(settings) == StandardCredentials(
        app_id="APP", api_key="search-key"
    )


def test_incomplete_crawler_pair_falls_back_to_standard(make_settings):
    settings = make_settings(
        crawler_user_id="abc", algolia_app_id="APP", algolia_api_key="admin-key"
    )

    assert isinstance(credentials_from_settings(settings), StandardCredentials)


@pytest.mark.parametrize(
    ("key", "preview"),
    [
        ("abcdefghijkl", "abcd...ijkl"),
        ("123456789", "1234...6789"),
        ("12345678", "***"),
        ("x", "***"),
    ],
)
def test_redact_key(key, preview):
    assert redact_key(key) == preview


@pytest.mark.asyncio
async def test_resolution_reports_scheme_without_secret(make_settings, console, output):
    settings = make_settings(crawler_user_id="abc", crawler_api_key="supersecretvalue")

    await resolve_credentials(settings, RunMode.NON_INTERACTIVE, None, console)

    text = output.getvalue()
    assert "Crawler-specific credentials" in text
    assert "supe...alue (length: 16)" in text
    assert "supersecretvalue" not in text


@pytest.mark.asyncio
async def test_missing_credentials_non_interactive_names_both_options(
    make_settings, console, scripted_prompter
):
    prompter = scripted_prompter()

    with pytest.raises(MissingCredentials) as excinfo:
        await resolve_credentials(make_settings(), RunMode.NON_INTERACTIVE, prompter, console)

    message = str(excinfo.value)
    assert "CRAWLER_USER_ID" in message
    assert "CRAWLER_API_KEY" in message
    assert "ALGOLIA_APP_ID" in message
    assert "ALGOLIA_API_KEY" in message
    assert "https://crawler.algolia.com/admin/user/settings/" in message
    assert prompter.questions == []


@pytest.mark.asyncio
async def test_key_without_app_id_asks_for_app_id(make_settings, console):
    settings = make_settings(algolia_api_key="admin-key-1234")

    with pytest.raises(MissingCredentials, match="ALGOLIA_APP_ID is required"):
        await resolve_credentials(settings, RunMode.NON_INTERACTIVE, None, console)


@pytest.mark.asyncio
@pytest.mark.parametrize("affirmative", ["y", "Y", "s", "S"])
async def test_interactive_crawler_entry(make_settings, console, scripted_prompter, affirmative):
    prompter = scripted_prompter(affirmative, "user-7", "typed-key-9999")

    credentials = await resolve_credentials(
        make_settings(), RunMode.INTERACTIVE, prompter, console
    )

    assert credentials == CrawlerCredentials(user_id="user-7", api_key="typed-key-9999")
    assert prompter.questions == [
        "Use Crawler credentials? (y/n): ",
        "Crawler User ID: ",
        "Crawler API Key: ",
    ]


@pytest.mark.asyncio
async def test_interactive_standard_entry_keeps_app_id_from_env(
    make_settings, console, scripted_prompter
):
    prompter = scripted_prompter("n", "typed-admin-key")

    credentials = await resolve_credentials(
        make_settings(algolia_app_id="APP"), RunMode.INTERACTIVE, prompter, console
    )

    assert credentials == StandardCredentials(app_id="APP", api_key="typed-admin-key")
    assert prompter.questions[-1] == "API Key: "


@pytest.mark.asyncio
async def test_interactive_entry_is_attempted_once(make_settings, console, scripted_prompter):
    prompter = scripted_prompter("y", "", "")

    with pytest.raises(MissingCredentials):
        await resolve_credentials(make_settings(), RunMode.INTERACTIVE, prompter, console)

    assert len(prompter.questions) == 3


@pytest.mark.asyncio
async def test_debug_logs_presence_only(make_settings, console, caplog):
    settings = make_settings(crawler_user_id="abc", crawler_api_key="xyz12345", debug=True)

    with caplog.at_level(logging.DEBUG, logger="core.services.credentials"):
        await resolve_credentials(settings, RunMode.NON_INTERACTIVE, None, console)

    assert "CRAWLER_API_KEY: set" in caplog.text
    assert "ALGOLIA_APP_ID: not set" in caplog.text
    assert "xyz12345" not in caplog.text
