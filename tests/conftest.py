from __future__ import annotations

import io

import pytest
from rich.console import Console

from core.config import SyncSettings
from core.domain.language import is_affirmative

RECOGNIZED_VARIABLES = (
    "CRAWLER_USER_ID",
    "CRAWLER_API_KEY",
    "ALGOLIA_APP_ID",
    "ALGOLIA_API_KEY",
    "ALGOLIA_SEARCH_API_KEY",
    "DEBUG",
    "CRAWLER_SYNC_INDEX_NAME",
    "CRAWLER_SYNC_START_URL",
)


class ScriptedPrompter:
    """Prompter with canned answers; records every question asked."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.questions: list[str] = []

    async def ask(self, question: str) -> str:
        self.questions.append(question)
        if not self._answers:
            raise AssertionError(f"unexpected prompt: {question!r}")
        return self._answers.pop(0)

    async def confirm(self, question: str) -> bool:
        return is_affirmative(await self.ask(question))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No real credentials or `.env` files leak into the tests."""

    for name in RECOGNIZED_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return Console(file=output, width=200, color_system=None)


@pytest.fixture
def make_settings():
    def factory(**values) -> SyncSettings:
        return SyncSettings(_env_file=None, **values)

    return factory


@pytest.fixture
def crawler_settings(make_settings):
    return make_settings(crawler_user_id="abc", crawler_api_key="xyz12345")


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter
