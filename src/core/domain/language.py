"""Language utilities for crawler-sync prompts.

Operators answer yes/no questions in either English or Spanish, so every
supported language contributes its single-letter affirmative. Keeping this
in the domain layer lets both the CLI and the services share one rule.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for operator answers."""

    ENGLISH = "en"
    SPANISH = "es"

    @property
    def affirmative(self) -> str:
        """Single-letter "yes" for this language ("sí" starts with s)."""

        return "s" if self is Language.SPANISH else "y"


AFFIRMATIVE_ANSWERS = frozenset(language.affirmative for language in Language)


def is_affirmative(answer: str) -> bool:
    """True for `y`/`s` in any case, ignoring surrounding whitespace."""

    return answer.strip().lower() in AFFIRMATIVE_ANSWERS
