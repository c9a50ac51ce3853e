"""Core data models for the news feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

PLACEHOLDER = "N/A"

RawArticle = Mapping[str, Any]


@dataclass(frozen=True)
class Query:
    """Search term, category and page requested by a caller."""

    search_term: Optional[str] = None
    category: Optional[str] = None
    page: Optional[int] = None

    def __post_init__(self) -> None:
        if self.page is not None and self.page < 1:
            raise ValueError(f"page must be a positive integer, got {self.page!r}")


@dataclass
class NormalizedArticle:
    """Provider-independent representation of one article."""

    date: str
    author: str
    title: str
    category: str
    web_url: str
    source: str
    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "author": self.author,
            "title": self.title,
            "category": self.category,
            "web_url": self.web_url,
            "source": self.source,
        }


@dataclass
class ProviderResult:
    """Raw items returned by one provider, or the reason it returned none."""

    provider: str
    items: List[RawArticle] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class FeedResponse:
    """Sorted articles wrapped with status metadata."""

    page: Optional[int]
    data: List[NormalizedArticle]
    status: str = "ok"
    message: str = "Success"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "page": self.page,
            "data": [article.to_dict() for article in self.data],
        }


__all__ = [
    "FeedResponse",
    "NormalizedArticle",
    "PLACEHOLDER",
    "ProviderResult",
    "Query",
    "RawArticle",
]
