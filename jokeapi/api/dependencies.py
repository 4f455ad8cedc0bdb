from __future__ import annotations

import random

from fastapi import Request

from jokeapi.jokes.store import JokeStore
from jokeapi.observability.metrics import JokeMetrics


def get_store(request: Request) -> JokeStore:
    return request.app.state.store


def get_rng(request: Request) -> random.Random:
    return request.app.state.random_source()


def get_app_metrics(request: Request) -> JokeMetrics:
    return request.app.state.metrics
