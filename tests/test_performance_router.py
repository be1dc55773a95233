import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app
from config.settings import TrendSettings
from performance.adapter.input.web.performance_router import get_performance_usecase
from performance.application.usecase.performance_query_usecase import PerformanceQueryUseCase
from performance.infrastructure.repository.metric_store_repository_impl import MetricStoreRepositoryImpl


@pytest.fixture
def client(repository):
    usecase = PerformanceQueryUseCase(repository, TrendSettings())
    app.dependency_overrides[get_performance_usecase] = lambda: usecase
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_trends_endpoint(seed, client, ranking_rows):
    seed(ranking_rows)
    response = client.get("/performance/trends", params={"granularity": "daily"})

    assert response.status_code == 200
    body = response.json()
    assert body["granularity"] == "daily"
    assert [item["period"] for item in body["items"]] == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"]


def test_trends_endpoint_status_codes(seed, client, ranking_rows):
    assert client.get("/performance/trends", params={"granularity": "daily"}).status_code == 404
    assert client.get("/performance/trends", params={"granularity": "hourly"}).status_code == 400
    assert client.get("/performance/trends").status_code == 400

    seed(ranking_rows)
    response = client.get("/performance/trends", params={"granularity": "weekly", "video_id": "missing"})
    assert response.status_code == 200
    assert response.json()["items"] == []


def test_top_videos_endpoint(seed, client, ranking_rows):
    seed(ranking_rows)
    response = client.get("/performance/videos/top", params={"metric": "views", "page": 1, "page_size": 2})

    assert response.status_code == 200
    assert [item["video_id"] for item in response.json()["items"]] == ["b", "c"]
    assert client.get("/performance/videos/top", params={"page": 9}).json()["items"] == []


@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"page_size": -1}, {"page": "abc"}, {"metric": "shares"}],
)
def test_top_videos_endpoint_rejects_bad_parameters(client, params):
    response = client.get("/performance/videos/top", params=params)
    assert response.status_code == 400
    assert "detail" in response.json()


def test_growth_and_engagement_endpoints(seed, client, ranking_rows):
    seed(ranking_rows)
    growth = client.get("/performance/videos/growth").json()["items"]
    engagement = client.get("/performance/videos/engagement", params={"limit": 2}).json()["items"]

    assert growth[0] == {"video_id": "c", "growth": 290}
    assert engagement == [{"video_id": "a", "engagement": 29}, {"video_id": "b", "engagement": 2}]
    assert client.get("/performance/videos/growth", params={"limit": 0}).status_code == 400


def test_compare_endpoint(seed, client, ranking_rows):
    seed(ranking_rows)
    response = client.get("/performance/videos/compare", params={"video_ids": "b,missing"})

    assert response.status_code == 200
    assert [item["video_id"] for item in response.json()["items"]] == ["b"]
    assert client.get("/performance/videos/compare").status_code == 400


def test_video_summary_endpoint(seed, client, ranking_rows):
    seed(ranking_rows)
    response = client.get("/performance/videos/a/summary")

    assert response.status_code == 200
    assert response.json()["growth"] == 50
    assert client.get("/performance/videos/missing/summary").status_code == 404


def test_unavailable_store_maps_to_503():
    def broken_session():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    usecase = PerformanceQueryUseCase(MetricStoreRepositoryImpl(session_factory=broken_session), TrendSettings())
    app.dependency_overrides[get_performance_usecase] = lambda: usecase
    try:
        response = TestClient(app).get("/performance/videos/growth")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json() == {"detail": "metric store is unavailable"}


def test_unexpected_failure_maps_to_500_without_details():
    class ExplodingUseCase:
        def get_top_growth(self, limit):
            raise RuntimeError("SELECT secret FROM performance_metrics")

    app.dependency_overrides[get_performance_usecase] = lambda: ExplodingUseCase()
    try:
        response = TestClient(app).get("/performance/videos/growth")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "internal error"}


def test_response_echoes_validated_parameters(seed, client, ranking_rows):
    seed(ranking_rows)
    trends = client.get("/performance/trends", params={"granularity": " Weekly "}).json()
    top = client.get("/performance/videos/top", params={"metric": " LIKES "}).json()

    assert trends["granularity"] == "weekly"
    assert top["metric"] == "likes"
    assert top["page_size"] == 10


def test_page_number_beyond_the_maximum_is_rejected(client):
    response = client.get("/performance/videos/top", params={"page": 1_000_000_000_000_000_000})
    assert response.status_code == 400


def test_concurrent_requests_do_not_block_each_other():
    class SlowRepository:
        def fetch_top_growth(self, limit=10):
            time.sleep(0.5)
            return []

    usecase = PerformanceQueryUseCase(SlowRepository(), TrendSettings())
    app.dependency_overrides[get_performance_usecase] = lambda: usecase

    async def fetch_concurrently():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
            return await asyncio.gather(*(http.get("/performance/videos/growth") for _ in range(4)))

    try:
        started = time.perf_counter()
        responses = asyncio.run(fetch_concurrently())
        elapsed = time.perf_counter() - started
    finally:
        app.dependency_overrides.clear()

    assert [r.status_code for r in responses] == [200] * 4
    assert elapsed < 1.5
