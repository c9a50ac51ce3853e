"""News feed aggregation package."""

from .config import AggregatorConfig, load_config
from .errors import AggregationError, ProviderResponseError
from .models import FeedResponse, NormalizedArticle, Query
from .providers import PROVIDER_ADAPTERS, ProviderAdapter, extract_article
from .registry import ProviderRegistry
from .service import NewsAggregator

__all__ = [
    "AggregationError",
    "AggregatorConfig",
    "FeedResponse",
    "NewsAggregator",
    "NormalizedArticle",
    "PROVIDER_ADAPTERS",
    "ProviderAdapter",
    "ProviderRegistry",
    "ProviderResponseError",
    "Query",
    "extract_article",
    "load_config",
]
