import pytest
from httpx import ASGITransport, AsyncClient

from jokeapi.main import create_app
from jokeapi.observability.metrics import JokeMetrics


async def test_metrics_endpoint_exposes_prometheus_text(api_client) -> None:
    for _ in range(3):
        await api_client.get("/joke")

    resp = await api_client.get("/metrics")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    body = resp.text
    assert "# TYPE api_requests_total counter" in body
    assert 'api_requests_total{endpoint="/joke",method="GET"} 3.0' in body
    assert "api_response_time_seconds_bucket" in body


async def test_request_counter_counts_every_request(api_client, metrics) -> None:
    await api_client.get("/joke", params={"lang": "es"})
    await api_client.get("/joke", params={"lang": "it"})
    await api_client.get("/health")

    assert metrics.request_count(endpoint="/joke", method="GET") == 2
    assert metrics.request_count(endpoint="/health", method="GET") == 1
    assert metrics.request_count(endpoint="/metrics", method="GET") == 0

    await api_client.get("/metrics")
    assert metrics.request_count(endpoint="/metrics", method="GET") == 1


async def test_response_time_is_tagged_with_actual_status(api_client, metrics) -> None:
    await api_client.get("/joke", params={"lang": "fr"})
    await api_client.get("/joke", params={"lang": "xx"})

    def observations(status_code: str) -> float | None:
        return metrics.registry.get_sample_value(
            "api_response_time_seconds_count",
            {"endpoint": "/joke", "method": "GET", "status_code": status_code},
        )

    assert observations("200") == 1
    assert observations("400") == 1
    total = metrics.registry.get_sample_value(
        "api_response_time_seconds_sum",
        {"endpoint": "/joke", "method": "GET", "status_code": "200"},
    )
    assert total is not None and total >= 0.0


async def test_apps_do_not_share_metrics(api_client, metrics, make_client) -> None:
    other = JokeMetrics()
    async with make_client(create_app(metrics=other)) as client:
        await client.get("/joke")

    assert other.request_count(endpoint="/joke", method="GET") == 1
    assert metrics.request_count(endpoint="/joke", method="GET") == 0


def test_registering_metrics_twice_on_one_registry_fails() -> None:
    metrics = JokeMetrics()
    with pytest.raises(ValueError):
        JokeMetrics(registry=metrics.registry)


async def test_metrics_endpoint_can_be_disabled(monkeypatch, api_client) -> None:
    from jokeapi.config import get_settings

    monkeypatch.setenv("ENABLE_METRICS_ENDPOINT", "false")
    get_settings.cache_clear()

    resp = await api_client.get("/metrics")
    assert resp.status_code == 404


def _series(metrics: JokeMetrics, sample_name: str) -> set[tuple[tuple[str, str], ...]]:
    return {
        tuple(sorted(sample.labels.items()))
        for family in metrics.registry.collect()
        for sample in family.samples
        if sample.name == sample_name
    }


async def test_unrouted_paths_do_not_create_series(api_client, metrics) -> None:
    await api_client.get("/joke")
    requests_before = _series(metrics, "api_requests_total")
    timings_before = _series(metrics, "api_response_time_seconds_count")

    for i in range(25):
        resp = await api_client.get(f"/missing-{i}")
        assert resp.status_code == 404

    assert _series(metrics, "api_requests_total") == requests_before
    assert _series(metrics, "api_response_time_seconds_count") == timings_before
    assert metrics.request_count(endpoint="/missing-0", method="GET") == 0


async def test_handler_errors_propagate_and_are_timed_as_500(metrics) -> None:
    app = create_app(metrics=metrics)

    @app.get("/explode")
    def explode() -> None:
        raise RuntimeError("kaboom")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/explode")

    assert resp.status_code == 500
    assert metrics.request_count(endpoint="/explode", method="GET") == 1
    assert (
        metrics.registry.get_sample_value(
            "api_response_time_seconds_count",
            {"endpoint": "/explode", "method": "GET", "status_code": "500"},
        )
        == 1
    )


async def test_handler_errors_reach_the_server_by_default(metrics, make_client) -> None:
    app = create_app(metrics=metrics)

    @app.get("/explode")
    def explode() -> None:
        raise RuntimeError("kaboom")

    async with make_client(app) as client:
        with pytest.raises(RuntimeError, match="kaboom"):
            await client.get("/explode")
