"""
Statistics endpoint.

GET /api/v1/stats?limit=5 — totals, per-link clicks for the most recent
links, and click breakdowns by source and location. Recomputed from a fresh
registry snapshot on every call.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from dependencies import get_registry
from schemas.dto.responses.stats import StatsResponse
from services.analytics import build_report
from services.link_registry import LinkRegistry
from shared.logging import get_logger, should_sample

log = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    limit: int = Query(default=5, ge=0, le=100),
    registry: LinkRegistry = Depends(get_registry),
) -> StatsResponse:
    report = build_report(registry.list(), now=registry.now(), limit=limit)

    if should_sample("stats_query"):
        log.info(
            "stats_query",
            link_count=report.totals.link_count,
            total_clicks=report.totals.total_clicks,
            limit=limit,
        )
    return StatsResponse.from_report(report, capacity=registry.max_active_links)
