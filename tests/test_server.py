import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeAdapter, items_response
from newsfeed.server import GENERIC_ERROR, create_app


@pytest.fixture
def routes():
    return {
        "a.test": items_response(
            {"published": "2024-01-01T00:00:00Z", "headline": "Older", "link": "https://a.test/1"}
        ),
        "b.test": items_response(
            {"published": "2024-06-01T00:00:00Z", "headline": "Newer", "link": "https://b.test/1"}
        ),
    }


@pytest.fixture
def client(make_aggregator, routes):
    aggregator = make_aggregator(
        [FakeAdapter("Provider A", "a.test"), FakeAdapter("Provider B", "b.test")], routes
    )
    return TestClient(create_app(aggregator))


def test_health(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_latest_news(client):
    response = client.get("/news", params={"page": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["message"] == "Success"
    assert body["page"] == 2
    assert [item["title"] for item in body["data"]] == ["Newer", "Older"]
    assert set(body["data"][0]) == {
        "id", "date", "author", "title", "category", "web_url", "source"
    }


def test_page_is_null_when_not_requested(client):
    assert client.get("/news/search", params={"q": "anything"}).json()["page"] is None


def test_category_endpoint(client):
    response = client.get("/news/category", params={"category": "world"})
    assert response.status_code == 200
    assert len(response.json()["data"]) == 2


@pytest.mark.parametrize("page", ["0", "-1", "abc"])
def test_invalid_page_is_rejected(client, page):
    assert client.get("/news", params={"page": page}).status_code == 422


def test_every_provider_down_is_still_ok(make_aggregator):
    def down(request):
        raise httpx.ConnectError("down", request=request)

    aggregator = make_aggregator([FakeAdapter("Provider A", "a.test")], {"a.test": down})
    response = TestClient(create_app(aggregator)).get("/news")

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_aggregation_failure_returns_generic_error(make_aggregator, routes):
    aggregator = make_aggregator(
        [FakeAdapter("Provider A", "a.test")], routes, id_factory=lambda: ""
    )
    response = TestClient(create_app(aggregator)).get("/news")

    assert response.status_code == 500
    assert response.json() == {"error": GENERIC_ERROR}


def test_unexpected_error_still_returns_json(make_aggregator, routes, monkeypatch):
    aggregator = make_aggregator([FakeAdapter("Provider A", "a.test")], routes)

    def explode(query):
        raise KeyError("registry exploded")

    monkeypatch.setattr(aggregator.registry, "select", explode)
    client = TestClient(create_app(aggregator), raise_server_exceptions=False)
    response = client.get("/news/search", params={"q": "x"})

    assert response.status_code == 500
    assert response.json() == {"error": GENERIC_ERROR}
