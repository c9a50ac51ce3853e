"""Core news aggregation service."""

from __future__ import annotations

import logging
from typing import Optional

from .config import AggregatorConfig
from .errors import AggregationError
from .fetching import FetchOrchestrator
from .models import FeedResponse, Query
from .normalizer import Normalizer
from .registry import ProviderRegistry
from .sorting import sort_articles

LOGGER = logging.getLogger(__name__)


class NewsAggregator:
    """Fetch, normalize and order articles from every active provider."""

    def __init__(
        self,
        registry: ProviderRegistry,
        orchestrator: FetchOrchestrator,
        normalizer: Optional[Normalizer] = None,
    ) -> None:
        self.registry = registry
        self.orchestrator = orchestrator
        self.normalizer = normalizer or Normalizer()

    @classmethod
    def from_config(cls, config: AggregatorConfig) -> "NewsAggregator":
        return cls(ProviderRegistry.from_config(config), FetchOrchestrator(config))

    def close(self) -> None:
        LOGGER.info("Stopping news aggregator service")
        self.orchestrator.close()

    def aggregate(self, query: Query) -> FeedResponse:
        adapters = self.registry.select(query)
        LOGGER.info(
            "Aggregating news | q=%r category=%r page=%s providers=%d",
            query.search_term,
            query.category,
            query.page,
            len(adapters),
        )
        results = self.orchestrator.fetch(adapters, query)
        try:
            articles = self.normalizer.normalize(results, adapters)
            articles = sort_articles(articles)
        except Exception as exc:
            LOGGER.exception("Error occurred while formatting articles: %s", exc)
            raise AggregationError("failed to format news articles") from exc

        failed = sum(1 for result in results.values() if result.failed)
        LOGGER.info("Returning %d articles (%d providers failed)", len(articles), failed)
        return FeedResponse(page=query.page, data=articles)

    def get_news(self, page: Optional[int] = None) -> FeedResponse:
        return self.aggregate(Query(page=page))

    def search_news(self, search_term: Optional[str], page: Optional[int] = None) -> FeedResponse:
        return self.aggregate(Query(search_term=search_term, page=page))

    def news_category(self, category: Optional[str], page: Optional[int] = None) -> FeedResponse:
        return self.aggregate(Query(category=category, page=page))


__all__ = ["NewsAggregator"]
