"""Terminal rendering of an aggregated feed."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from .models import FeedResponse


def build_table(feed: FeedResponse) -> Table:
    page = feed.page if feed.page is not None else "-"
    table = Table(title=f"News feed • page {page} • {len(feed.data)} articles")
    table.add_column("Date", no_wrap=True)
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Title", overflow="fold")
    table.add_column("Author")
    for article in feed.data:
        table.add_row(article.date, article.source, article.category, article.title, article.author)
    return table


def render_feed(feed: FeedResponse, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not feed.data:
        console.print("No articles returned by the active providers.")
        return
    console.print(build_table(feed))


__all__ = ["build_table", "render_feed"]
