"""Exceptions raised by the news feed pipeline."""

from __future__ import annotations


class ProviderResponseError(ValueError):
    """A provider answered, but not with the body shape its adapter expects."""


class AggregationError(RuntimeError):
    """Formatting the merged feed failed in a way no single provider explains."""


__all__ = ["AggregationError", "ProviderResponseError"]
