"""Concurrent retrieval of raw items from the selected providers."""

from __future__ import annotations

import concurrent.futures as futures
import logging
import random
import time
from typing import Any, Dict, List, Optional, Sequence

import httpx

from .config import AggregatorConfig
from .errors import ProviderResponseError
from .models import ProviderResult, Query, RawArticle
from .providers import ProviderAdapter

LOGGER = logging.getLogger(__name__)


class _RetryableError(Exception):
    pass


class FetchOrchestrator:
    """Issue one GET per provider and collect each outcome independently."""

    def __init__(self, config: AggregatorConfig, client: Optional[httpx.Client] = None) -> None:
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @staticmethod
    def _clean_params(params: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in params.items() if value is not None}

    def _request(self, adapter: ProviderAdapter, params: Dict[str, Any]) -> List[RawArticle]:
        try:
            response = self._client.get(
                adapter.endpoint_url, params=params, timeout=adapter.timeout
            )
        except httpx.TimeoutException as exc:
            # Timeouts end the provider's fetch without a retry.
            raise ProviderResponseError(f"timed out after {adapter.timeout}s: {exc!r}") from exc
        except httpx.TransportError as exc:
            raise _RetryableError(f"request failed: {exc!r}") from exc

        if response.status_code >= 500:
            raise _RetryableError(f"upstream status {response.status_code}")
        if response.status_code >= 400:
            raise ProviderResponseError(f"upstream status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderResponseError("response body is not valid JSON") from exc
        return adapter.extract_items(payload)

    def fetch_one(self, adapter: ProviderAdapter, query: Query) -> ProviderResult:
        """Fetch a single provider, converting every failure into an empty result."""

        params = self._clean_params(adapter.build_params(query))
        retries = self.config.provider_retries
        started = time.monotonic()
        attempt = 0
        while True:
            try:
                items = self._request(adapter, params)
                break
            except _RetryableError as exc:
                if attempt >= retries:
                    return self._failure(adapter, f"{exc} (after {attempt + 1} attempts)")
                sleep_s = (1.5 ** attempt) + random.random() * 0.5
                LOGGER.debug(
                    "Retrying %s in %.2fs after attempt %d: %s",
                    adapter.name,
                    sleep_s,
                    attempt + 1,
                    exc,
                )
                time.sleep(sleep_s)
                attempt += 1
            except ProviderResponseError as exc:
                return self._failure(adapter, str(exc))

        elapsed_ms = int((time.monotonic() - started) * 1000)
        LOGGER.debug("Fetched %d items from %s in %dms", len(items), adapter.name, elapsed_ms)
        return ProviderResult(provider=adapter.name, items=items)

    @staticmethod
    def _failure(adapter: ProviderAdapter, reason: str) -> ProviderResult:
        LOGGER.warning("Provider %s contributed no articles | err=%s", adapter.name, reason)
        return ProviderResult(provider=adapter.name, error=reason)

    def fetch(
        self, adapters: Sequence[ProviderAdapter], query: Query
    ) -> Dict[str, ProviderResult]:
        """Fetch every adapter concurrently; results are keyed in ``adapters`` order."""

        if not adapters:
            return {}

        collected: Dict[str, ProviderResult] = {}
        workers = min(self.config.concurrency, len(adapters))
        with futures.ThreadPoolExecutor(max_workers=workers) as pool:
            future_to_adapter = {
                pool.submit(self.fetch_one, adapter, query): adapter for adapter in adapters
            }
            for fut in futures.as_completed(future_to_adapter):
                adapter = future_to_adapter[fut]
                try:
                    collected[adapter.name] = fut.result()
                except Exception as exc:
                    # An adapter's build_params or extract_items misbehaved.
                    collected[adapter.name] = self._failure(adapter, f"unexpected error: {exc!r}")

        return {adapter.name: collected[adapter.name] for adapter in adapters}

    def __enter__(self) -> "FetchOrchestrator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["FetchOrchestrator"]
