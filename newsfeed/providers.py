"""Adapters describing how to query and parse each upstream news API."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Type

from .errors import ProviderResponseError
from .models import PLACEHOLDER, NormalizedArticle, Query, RawArticle

LOGGER = logging.getLogger(__name__)


def _dig(data: Any, path: str) -> Any:
    """Follow a dotted ``path`` through nested mappings, returning ``None`` on a miss."""

    current = data
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def _text(value: Any, fallback: str = PLACEHOLDER) -> str:
    if value is None:
        return fallback
    text = str(value).strip()
    return text or fallback


class ProviderAdapter(ABC):
    """
    Knowledge about one upstream provider.

    Subclasses declare the endpoint, the dotted path to the item array in the
    response body and optional capabilities such as ``max_page``. They build
    the request parameters for a :class:`Query` and map one raw item onto a
    :class:`NormalizedArticle`.
    """

    name: str = ""
    endpoint_url: str = ""
    response_items_path: str = ""
    api_key_name: str = ""
    page_size: int = 10
    # Highest 1-based page the provider serves; ``None`` means unbounded.
    max_page: Optional[int] = None

    def __init__(self, api_key: Optional[str] = None, timeout: float = 10.0) -> None:
        self.api_key = api_key
        self.timeout = timeout

    def supports(self, query: Query) -> bool:
        """Return False when the query asks for a page beyond ``max_page``."""

        if self.max_page is None or query.page is None:
            return True
        return query.page <= self.max_page

    @abstractmethod
    def build_params(self, query: Query) -> Dict[str, Any]:
        """Translate ``query`` into this provider's query-string parameters."""

    @abstractmethod
    def to_article(self, raw: RawArticle) -> NormalizedArticle:
        """Map one raw provider item onto the common schema (id left unset)."""

    def extract_items(self, payload: Any) -> List[RawArticle]:
        """Locate the list of raw items inside a decoded response body."""

        items = _dig(payload, self.response_items_path)
        if items is None:
            raise ProviderResponseError(
                f"response has no '{self.response_items_path}' array"
            )
        if not isinstance(items, list):
            raise ProviderResponseError(
                f"'{self.response_items_path}' is {type(items).__name__}, expected list"
            )
        return items

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class GuardianAdapter(ProviderAdapter):
    """The Guardian content API."""

    name = "The Guardian"
    endpoint_url = "https://content.guardianapis.com/search"
    response_items_path = "response.results"
    api_key_name = "guardian_api_key"

    def build_params(self, query: Query) -> Dict[str, Any]:
        section = query.category.strip().lower() if query.category else None
        return {
            "q": query.search_term,
            "section": section or None,
            "page": query.page,
            "page-size": self.page_size,
            "show-fields": "byline",
            "api-key": self.api_key,
        }

    def to_article(self, raw: RawArticle) -> NormalizedArticle:
        return NormalizedArticle(
            date=_text(raw.get("webPublicationDate")),
            author=_text(_dig(raw, "fields.byline"), fallback=self.name),
            title=_text(raw.get("webTitle")),
            category=_text(raw.get("sectionName")),
            web_url=_text(raw.get("webUrl")),
            source=self.name,
        )


class NewsApiAdapter(ProviderAdapter):
    """newsapi.org ``/v2/everything``; the free tier stops serving after page 10."""

    name = "The News API"
    endpoint_url = "https://newsapi.org/v2/everything"
    response_items_path = "articles"
    api_key_name = "news_api_key"
    max_page = 10

    def build_params(self, query: Query) -> Dict[str, Any]:
        # The endpoint has no category filter and requires some ``q``.
        return {
            "q": query.search_term or "*",
            "page": query.page,
            "pageSize": self.page_size,
            "apiKey": self.api_key,
        }

    def to_article(self, raw: RawArticle) -> NormalizedArticle:
        return NormalizedArticle(
            date=_text(raw.get("publishedAt")),
            author=_text(raw.get("author")),
            title=_text(raw.get("title")),
            category=PLACEHOLDER,
            web_url=_text(raw.get("url")),
            source=self.name,
        )


class NewYorkTimesAdapter(ProviderAdapter):
    """New York Times article search API."""

    name = "The New York Times"
    endpoint_url = "https://api.nytimes.com/svc/search/v2/articlesearch.json"
    response_items_path = "response.docs"
    api_key_name = "ny_times_api_key"
    # Upstream pages are zero-based and capped at 100.
    max_page = 101

    def build_params(self, query: Query) -> Dict[str, Any]:
        filter_query = None
        if query.category and query.category.strip():
            filter_query = f'section_name:("{query.category.strip()}")'
        return {
            "q": query.search_term,
            "fq": filter_query,
            "page": query.page - 1 if query.page is not None else None,
            "api-key": self.api_key,
        }

    def to_article(self, raw: RawArticle) -> NormalizedArticle:
        title = raw.get("abstract") or _dig(raw, "headline.main")
        return NormalizedArticle(
            date=_text(raw.get("pub_date")),
            author=_text(_dig(raw, "byline.original")),
            title=_text(title),
            category=_text(raw.get("section_name")),
            web_url=_text(raw.get("web_url")),
            source=self.name,
        )


# Configuration name -> adapter class. Order here is the registration order.
PROVIDER_ADAPTERS: Dict[str, Type[ProviderAdapter]] = {
    "guardian": GuardianAdapter,
    "newsapi": NewsApiAdapter,
    "nytimes": NewYorkTimesAdapter,
}


def extract_article(provider_name: str, raw: RawArticle) -> NormalizedArticle:
    """
    Normalize ``raw`` using the adapter registered under ``provider_name``.

    ``provider_name`` may be either the configuration key (``"guardian"``) or
    the display name (``"The Guardian"``). Unknown providers produce a
    placeholder article rather than raising.
    """

    adapter_cls = PROVIDER_ADAPTERS.get(provider_name)
    if adapter_cls is None:
        for candidate in PROVIDER_ADAPTERS.values():
            if candidate.name == provider_name:
                adapter_cls = candidate
                break
    if adapter_cls is None:
        LOGGER.debug("No adapter registered for %r; using placeholder article", provider_name)
        return NormalizedArticle(
            date=PLACEHOLDER,
            author=PLACEHOLDER,
            title=PLACEHOLDER,
            category=PLACEHOLDER,
            web_url=PLACEHOLDER,
            source=_text(provider_name),
        )
    return adapter_cls().to_article(raw)


__all__ = [
    "GuardianAdapter",
    "NewYorkTimesAdapter",
    "NewsApiAdapter",
    "PROVIDER_ADAPTERS",
    "ProviderAdapter",
    "extract_article",
]
