"""Recency ordering for merged articles."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List

from dateutil import parser as dtparse

from .models import PLACEHOLDER, NormalizedArticle

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

# Two defaults that differ in every date field; a value that parses to
# different dates under them is missing its year, month or day.
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _parse_complete(value: str) -> datetime:
    first, second = (dtparse.parse(value, default=default) for default in _DEFAULTS)
    if first.date() != second.date():
        raise ValueError(f"incomplete date: {value!r}")
    return first


def parse_date(value: str) -> datetime:
    """Parse ``value`` into an aware UTC datetime; unparsable input maps to ``EARLIEST``."""

    if not value or value == PLACEHOLDER:
        return EARLIEST
    try:
        dt = dtparse.isoparse(value)
    except (ValueError, OverflowError):
        try:
            dt = _parse_complete(value)
        except (ValueError, OverflowError):
            return EARLIEST
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return EARLIEST


def sort_articles(articles: Iterable[NormalizedArticle]) -> List[NormalizedArticle]:
    """Most recent first. Equal dates keep their input order."""

    return sorted(articles, key=lambda article: parse_date(article.date), reverse=True)


__all__ = ["EARLIEST", "parse_date", "sort_articles"]
