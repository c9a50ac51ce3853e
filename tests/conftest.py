"""Shared fixtures: fake providers and a mock upstream transport."""

import itertools
from typing import Any, Callable, Dict, Optional, Union

import httpx
import pytest

from newsfeed.config import AggregatorConfig
from newsfeed.fetching import FetchOrchestrator
from newsfeed.models import PLACEHOLDER, NormalizedArticle, Query
from newsfeed.normalizer import Normalizer
from newsfeed.providers import ProviderAdapter
from newsfeed.registry import ProviderRegistry
from newsfeed.service import NewsAggregator

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeAdapter(ProviderAdapter):
    """Minimal provider reading ``{"items": [...]}`` from its own host."""

    response_items_path = "items"
    api_key_name = "fake_api_key"

    def __init__(self, name: str, host: str, max_page: Optional[int] = None) -> None:
        super().__init__(api_key="fake-key", timeout=1.0)
        self.name = name
        self.endpoint_url = f"https://{host}/search"
        self.max_page = max_page

    def build_params(self, query: Query) -> Dict[str, Any]:
        return {"q": query.search_term, "page": query.page, "key": self.api_key}

    def to_article(self, raw) -> NormalizedArticle:
        return NormalizedArticle(
            date=raw.get("published") or PLACEHOLDER,
            author=raw.get("by") or self.name,
            title=raw.get("headline") or PLACEHOLDER,
            category=raw.get("section") or PLACEHOLDER,
            web_url=raw.get("link") or PLACEHOLDER,
            source=self.name,
        )


def items_response(*items: Dict[str, Any]) -> httpx.Response:
    return httpx.Response(200, json={"items": list(items)})


@pytest.fixture
def config() -> AggregatorConfig:
    return AggregatorConfig(provider_retries=0, provider_timeout=1.0, concurrency=4)


@pytest.fixture
def make_client() -> Callable[[Dict[str, Route]], httpx.Client]:
    """Build an ``httpx.Client`` whose requests are answered per host."""

    def _make(routes: Dict[str, Route]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(request.url.host)
            if route is None:
                return httpx.Response(404, json={"message": "unknown host"})
            if isinstance(route, httpx.Response):
                return route
            return route(request)

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def make_aggregator(config, make_client, sequential_ids):
    def _make(adapters, routes: Dict[str, Route], id_factory=None) -> NewsAggregator:
        orchestrator = FetchOrchestrator(config, client=make_client(routes))
        return NewsAggregator(
            ProviderRegistry(adapters),
            orchestrator,
            Normalizer(id_factory=id_factory or sequential_ids),
        )

    return _make
