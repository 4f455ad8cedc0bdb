from __future__ import annotations

import random
import time
from typing import Callable

from jokeapi.jokes.store import FALLBACK_LANGUAGE, SUPPORTED_LANGUAGES, JokeStore
from jokeapi.models.schemas import JokeResponse


RandomSource = Callable[[], random.Random]


class UnsupportedLanguageError(ValueError):
    def __init__(self, lang: str) -> None:
        self.lang = lang
        allowed = ", ".join(SUPPORTED_LANGUAGES[:-1]) + f", or {SUPPORTED_LANGUAGES[-1]}"
        super().__init__(f"Unsupported language. Use: {allowed}.")


def time_seeded_random() -> random.Random:
    """Fresh non-cryptographic generator seeded from the wall clock."""

    return random.Random(time.time_ns())


def resolve_language(lang: str | None) -> str:
    if not lang:
        return FALLBACK_LANGUAGE
    if lang not in SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(lang)
    return lang


def pick_joke(store: JokeStore, lang: str | None, rng: random.Random) -> JokeResponse:
    """Pick one joke uniformly at random and localize it.

    `language` echoes the requested code even when the text came from the
    English fallback.
    """

    resolved = resolve_language(lang)
    record = store[rng.randrange(len(store))]
    return JokeResponse(joke=record.text_for(resolved), language=resolved)
