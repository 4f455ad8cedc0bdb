from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from jokeapi.config import get_settings
from jokeapi.jokes.store import JokeRecord, JokeStore
from jokeapi.main import create_app
from jokeapi.observability.metrics import JokeMetrics


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENABLE_METRICS_ENDPOINT", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def metrics() -> JokeMetrics:
    return JokeMetrics()


@pytest.fixture
def app(metrics: JokeMetrics) -> FastAPI:
    return create_app(metrics=metrics)


@pytest.fixture
def partial_store() -> JokeStore:
    # Record 2 has no Hindi or German text.
    return JokeStore(
        [
            JokeRecord(id=1, category="test", content={"en": "English one", "hi": "Hindi one", "de": "German one"}),
            JokeRecord(id=2, category="test", content={"en": "English two", "es": "Spanish two"}),
        ]
    )


def _client_for(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with _client_for(app) as client:
        yield client


@pytest.fixture
def make_client() -> Callable[[FastAPI], AsyncClient]:
    return _client_for
