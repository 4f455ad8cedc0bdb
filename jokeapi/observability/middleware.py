from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders
from starlette.routing import Match

from jokeapi.observability.metrics import JokeMetrics


class MetricsMiddleware:
    """Counts and times every routed HTTP request, binds a request_id for logs.

    Purely observational: the wrapped app's response is passed through
    untouched apart from the X-Request-ID header.
    """

    def __init__(self, app: Callable[..., Any], metrics: JokeMetrics) -> None:
        self.app = app
        self.metrics = metrics

    @staticmethod
    def _route_template(scope: dict[str, Any]) -> str | None:
        """Path template of the route that fully matches, or None.

        Labels use the template rather than the raw URL so unknown paths
        cannot mint new series.
        """

        router = getattr(scope.get("app"), "router", None)
        for route in getattr(router, "routes", ()):
            match, _ = route.matches(scope)
            if match == Match.FULL:
                return getattr(route, "path", None)
        return None

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        path = scope.get("path", "")
        method = scope.get("method", "")

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            method=method,
        )

        endpoint = self._route_template(scope)
        if endpoint is not None:
            self.metrics.count_request(endpoint=endpoint, method=method)

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_s = perf_counter() - start
            if endpoint is not None:
                self.metrics.observe_response_time(
                    endpoint=endpoint,
                    method=method,
                    status_code=status_code,
                    elapsed_s=elapsed_s,
                )

            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_s * 1000.0, 2),
            )

            structlog.contextvars.clear_contextvars()
