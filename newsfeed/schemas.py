"""Pydantic schemas for response payloads."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, validator

from .models import FeedResponse, NormalizedArticle


class ArticleResponse(BaseModel):
    id: str
    date: str
    author: str
    title: str
    category: str
    web_url: str
    source: str

    @validator("id")
    def validate_id(cls, value: str) -> str:
        if not value:
            raise ValueError("article id must not be empty")
        return value

    @classmethod
    def from_article(cls, article: NormalizedArticle) -> "ArticleResponse":
        return cls(**article.to_dict())


class NewsFeedResponse(BaseModel):
    status: str = "ok"
    message: str = "Success"
    page: Optional[int] = Field(None, description="Page number echoed from the request")
    data: List[ArticleResponse] = Field(default_factory=list)

    @classmethod
    def from_feed(cls, feed: FeedResponse) -> "NewsFeedResponse":
        return cls(
            status=feed.status,
            message=feed.message,
            page=feed.page,
            data=[ArticleResponse.from_article(article) for article in feed.data],
        )


class ErrorResponse(BaseModel):
    error: str


__all__ = ["ArticleResponse", "ErrorResponse", "NewsFeedResponse"]
