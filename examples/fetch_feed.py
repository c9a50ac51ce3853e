"""Command-line helper that runs one aggregation and prints the result."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Sequence

from newsfeed.config import load_config
from newsfeed.console import render_feed
from newsfeed.fetching import FetchOrchestrator
from newsfeed.models import Query
from newsfeed.registry import ProviderRegistry
from newsfeed.service import NewsAggregator


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch the aggregated news feed once")
    parser.add_argument("--q", dest="search_term", default=None, help="Search term")
    parser.add_argument("--category", default=None, help="Section or category name")
    parser.add_argument("--page", type=int, default=None, help="1-based page number")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw JSON payload instead of a table.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    query = Query(search_term=args.search_term, category=args.category, page=args.page)

    with FetchOrchestrator(config) as orchestrator:
        aggregator = NewsAggregator(ProviderRegistry.from_config(config), orchestrator)
        feed = aggregator.aggregate(query)

    if args.json:
        print(json.dumps(feed.to_dict(), ensure_ascii=False, indent=2))
    else:
        render_feed(feed)


if __name__ == "__main__":  # pragma: no cover
    main()
