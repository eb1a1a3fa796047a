"""
Read-only analytics over a snapshot of links.

Every function here is a pure function of its arguments: nothing is cached
or maintained incrementally, and the only clock reading happens when *now*
is omitted. Pass the output of ``LinkRegistry.list()`` as *links*; its
most-recent-first order is the order ``top_clicks`` reports in.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel

from schemas.models.link import Link


class LinkTotals(BaseModel):
    link_count: int
    total_clicks: int
    active_count: int


class AnalyticsReport(BaseModel):
    totals: LinkTotals
    top_clicks: list[tuple[str, int]]
    by_source: dict[str, int]
    by_location: dict[str, int]


def totals(links: Sequence[Link], now: Optional[datetime] = None) -> LinkTotals:
    """Link count, click count and number of links active at *now*."""
    if now is None:
        now = datetime.now(timezone.utc)
    return LinkTotals(
        link_count=len(links),
        total_clicks=sum(link.click_count for link in links),
        active_count=sum(1 for link in links if link.is_active(now)),
    )


def top_clicks(links: Iterable[Link], limit: int = 5) -> list[tuple[str, int]]:
    """(short_code, click_count) pairs in listing order, at most *limit* of them.

    Ordering is by recency of creation as given, not by click count.
    """
    if limit <= 0:
        return []
    pairs = []
    for link in links:
        if len(pairs) >= limit:
            break
        pairs.append((link.short_code, link.click_count))
    return pairs


def by_source(links: Iterable[Link]) -> dict[str, int]:
    return dict(Counter(click.source for link in links for click in link.clicks))


def by_location(links: Iterable[Link]) -> dict[str, int]:
    return dict(Counter(click.location for link in links for click in link.clicks))


def build_report(
    links: Sequence[Link], now: Optional[datetime] = None, limit: int = 5
) -> AnalyticsReport:
    return AnalyticsReport(
        totals=totals(links, now),
        top_clicks=top_clicks(links, limit),
        by_source=by_source(links),
        by_location=by_location(links),
    )
