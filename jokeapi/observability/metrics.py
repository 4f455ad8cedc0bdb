from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest


class JokeMetrics:
    """Request counter + latency histogram bound to a private registry.

    prometheus_client metrics lock internally, so one instance can be shared
    by every request thread.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.requests_total = Counter(
            "api_requests",
            "Total number of API requests",
            ["endpoint", "method"],
            registry=self.registry,
        )
        self.response_time = Histogram(
            "api_response_time_seconds",
            "API response time in seconds",
            ["endpoint", "method", "status_code"],
            registry=self.registry,
        )

    def count_request(self, endpoint: str, method: str) -> None:
        self.requests_total.labels(endpoint=endpoint, method=method).inc()

    def observe_response_time(self, endpoint: str, method: str, status_code: int, elapsed_s: float) -> None:
        self.response_time.labels(
            endpoint=endpoint,
            method=method,
            status_code=str(status_code),
        ).observe(elapsed_s)

    def request_count(self, endpoint: str, method: str) -> float:
        value = self.registry.get_sample_value(
            "api_requests_total",
            {"endpoint": endpoint, "method": method},
        )
        return value or 0.0

    def render(self) -> bytes:
        return generate_latest(self.registry)
