"""Entrypoint for running the news feed application."""

from __future__ import annotations

import logging

import uvicorn

from .config import load_config
from .server import create_app
from .service import NewsAggregator


def main() -> None:
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    aggregator = NewsAggregator.from_config(config)
    logging.info(
        "Active providers: %s",
        ", ".join(adapter.name for adapter in aggregator.registry.adapters) or "none",
    )

    app = create_app(aggregator)

    logging.info("Starting API server on %s:%s", config.api_host, config.api_port)
    try:
        uvicorn.run(app, host=config.api_host, port=config.api_port)
    finally:
        aggregator.close()


if __name__ == "__main__":  # pragma: no cover
    main()
