from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from jokeapi.api.jokes import router as jokes_router
from jokeapi.api.metrics import router as metrics_router
from jokeapi.config import get_settings
from jokeapi.jokes.selection import RandomSource, UnsupportedLanguageError, time_seeded_random
from jokeapi.jokes.store import JokeStore, get_default_store
from jokeapi.models.schemas import ErrorResponse, HealthResponse
from jokeapi.observability.logging import configure_logging
from jokeapi.observability.metrics import JokeMetrics
from jokeapi.observability.middleware import MetricsMiddleware


async def _unsupported_language_handler(request: Request, exc: UnsupportedLanguageError) -> JSONResponse:
    structlog.get_logger("jokes").info("unsupported_language", lang=exc.lang)
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())


def create_app(
    store: JokeStore | None = None,
    metrics: JokeMetrics | None = None,
    random_source: RandomSource | None = None,
) -> FastAPI:
    """Build the service with its joke store, metrics and random source wired in.

    Metrics registration errors propagate: a service that cannot expose its
    metrics should not start.
    """

    app = FastAPI(title="Joke API", version="0.1.0")
    app.state.store = store if store is not None else get_default_store()
    app.state.metrics = metrics if metrics is not None else JokeMetrics()
    app.state.random_source = random_source if random_source is not None else time_seeded_random

    app.add_middleware(MetricsMiddleware, metrics=app.state.metrics)
    app.add_exception_handler(UnsupportedLanguageError, _unsupported_language_handler)

    app.include_router(jokes_router)
    app.include_router(metrics_router)

    @app.on_event("startup")
    def _startup() -> None:
        settings = get_settings()
        configure_logging(settings.log_level, json_logs=settings.log_json)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    return app


app = create_app()
