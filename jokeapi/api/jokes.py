from __future__ import annotations

import random

from fastapi import APIRouter, Depends, Request

from jokeapi.api.dependencies import get_rng, get_store
from jokeapi.jokes.selection import pick_joke
from jokeapi.jokes.store import JokeStore
from jokeapi.models.schemas import ErrorResponse, JokeResponse

router = APIRouter(tags=["jokes"])


def _first_lang(request: Request) -> str | None:
    # Repeated ?lang= keeps the first value.
    values = request.query_params.getlist("lang")
    return values[0] if values else None


@router.get(
    "/joke",
    response_model=JokeResponse,
    responses={400: {"model": ErrorResponse}},
)
def get_random_joke(
    lang: str | None = Depends(_first_lang),
    store: JokeStore = Depends(get_store),
    rng: random.Random = Depends(get_rng),
) -> JokeResponse:
    # Plain def: FastAPI runs it in the threadpool, one worker thread per request.
    return pick_joke(store=store, lang=lang, rng=rng)
