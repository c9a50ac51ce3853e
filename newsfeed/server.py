"""FastAPI application serving the aggregated news feed."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import AggregationError
from .schemas import ErrorResponse, NewsFeedResponse
from .service import NewsAggregator

LOGGER = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while retrieving news articles."


def create_app(aggregator: NewsAggregator) -> FastAPI:
    app = FastAPI(title="News Feed", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AggregationError)
    async def _aggregation_failed(request: Request, exc: AggregationError) -> JSONResponse:
        LOGGER.error("Aggregation failed for %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error for %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})

    def get_aggregator() -> NewsAggregator:
        return aggregator

    error_responses = {500: {"model": ErrorResponse}}

    @app.get("/healthz", summary="Health check")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/news", response_model=NewsFeedResponse, responses=error_responses)
    def get_news(
        page: Optional[int] = Query(None, ge=1),
        service: NewsAggregator = Depends(get_aggregator),
    ) -> NewsFeedResponse:
        return NewsFeedResponse.from_feed(service.get_news(page=page))

    @app.get("/news/search", response_model=NewsFeedResponse, responses=error_responses)
    def search_news(
        q: Optional[str] = Query(None, description="Search term"),
        page: Optional[int] = Query(None, ge=1),
        service: NewsAggregator = Depends(get_aggregator),
    ) -> NewsFeedResponse:
        return NewsFeedResponse.from_feed(service.search_news(q, page=page))

    @app.get("/news/category", response_model=NewsFeedResponse, responses=error_responses)
    def news_category(
        category: Optional[str] = Query(None, description="Section or category name"),
        page: Optional[int] = Query(None, ge=1),
        service: NewsAggregator = Depends(get_aggregator),
    ) -> NewsFeedResponse:
        return NewsFeedResponse.from_feed(service.news_category(category, page=page))

    return app


__all__ = ["GENERIC_ERROR", "create_app"]
