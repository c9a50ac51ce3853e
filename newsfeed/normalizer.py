"""Per-provider extraction and merging into one article list."""

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Mapping, Optional, Sequence

from .models import NormalizedArticle, ProviderResult
from .providers import ProviderAdapter

LOGGER = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class Normalizer:
    """Apply each adapter's extraction to its raw items and assign ids."""

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._id_factory = id_factory or _new_id

    def _normalize_provider(
        self, adapter: ProviderAdapter, result: ProviderResult
    ) -> List[NormalizedArticle]:
        for index, raw in enumerate(result.items):
            if not isinstance(raw, Mapping):
                LOGGER.warning(
                    "Provider %s contributed no articles | err=item %d is %s, expected object",
                    adapter.name,
                    index,
                    type(raw).__name__,
                )
                return []
        return [adapter.to_article(raw) for raw in result.items]

    def normalize(
        self,
        results: Mapping[str, ProviderResult],
        adapters: Sequence[ProviderAdapter],
    ) -> List[NormalizedArticle]:
        """Merge ``results`` in ``adapters`` order, keeping upstream order per provider."""

        merged: List[NormalizedArticle] = []
        seen_ids = set()
        for adapter in adapters:
            result = results.get(adapter.name)
            if result is None or result.failed:
                continue
            for article in self._normalize_provider(adapter, result):
                article.id = self._unique_id(seen_ids)
                merged.append(article)
        return merged

    def _unique_id(self, seen: set, attempts: int = 8) -> str:
        for _ in range(attempts):
            identifier = self._id_factory()
            if identifier and identifier not in seen:
                seen.add(identifier)
                return identifier
        raise ValueError(f"id factory produced no fresh id in {attempts} attempts")


__all__ = ["Normalizer"]
