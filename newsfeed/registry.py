"""Selection of the provider adapters that should answer a query."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .config import AggregatorConfig
from .models import Query
from .providers import PROVIDER_ADAPTERS, ProviderAdapter

LOGGER = logging.getLogger(__name__)


class ProviderRegistry:
    """Ordered set of active adapters."""

    def __init__(self, adapters: Iterable[ProviderAdapter]) -> None:
        self._adapters: List[ProviderAdapter] = []
        seen = set()
        for adapter in adapters:
            if adapter.name in seen:
                raise ValueError(f"duplicate provider name: {adapter.name!r}")
            seen.add(adapter.name)
            self._adapters.append(adapter)

    @classmethod
    def from_config(cls, config: AggregatorConfig) -> "ProviderRegistry":
        """Instantiate the enabled adapters that have a configured credential."""

        adapters: List[ProviderAdapter] = []
        for key in config.enabled_providers:
            adapter_cls = PROVIDER_ADAPTERS.get(key)
            if adapter_cls is None:
                raise ValueError(
                    f"Unknown provider {key!r}. Available options: "
                    + ", ".join(sorted(PROVIDER_ADAPTERS))
                )
            api_key = config.api_key(adapter_cls.api_key_name)
            if api_key is None:
                LOGGER.warning(
                    "Provider %s disabled: no credential configured for %s",
                    adapter_cls.name,
                    adapter_cls.api_key_name,
                )
                continue
            adapters.append(adapter_cls(api_key=api_key, timeout=config.provider_timeout))
        if not adapters:
            LOGGER.warning("No news providers are active; every feed will be empty")
        return cls(adapters)

    @property
    def adapters(self) -> Sequence[ProviderAdapter]:
        return tuple(self._adapters)

    def select(self, query: Query) -> List[ProviderAdapter]:
        selected: List[ProviderAdapter] = []
        for adapter in self._adapters:
            if adapter.supports(query):
                selected.append(adapter)
            else:
                LOGGER.debug(
                    "Skipping %s: page %s exceeds max_page %s",
                    adapter.name,
                    query.page,
                    adapter.max_page,
                )
        return selected

    def __len__(self) -> int:
        return len(self._adapters)


__all__ = ["ProviderRegistry"]
