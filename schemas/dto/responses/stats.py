"""
Response DTO for the statistics endpoint.

StatsResponse — GET /api/v1/stats  (200)

``by_source`` and ``by_location`` have dynamic keys (whatever tags the
analytics collaborator supplied), so they are typed as plain dicts.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from services.analytics import AnalyticsReport


class StatsTotals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    link_count: int
    total_clicks: int
    active_count: int
    capacity: int


class CodeClicks(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    short_code: str
    clicks: int


class StatsResponse(BaseModel):
    """Response body for GET /api/v1/stats."""

    model_config = ConfigDict(populate_by_name=True)

    totals: StatsTotals
    top_clicks: list[CodeClicks]
    by_source: dict[str, int]
    by_location: dict[str, int]

    @classmethod
    def from_report(cls, report: AnalyticsReport, *, capacity: int) -> "StatsResponse":
        return cls(
            totals=StatsTotals(**report.totals.model_dump(), capacity=capacity),
            top_clicks=[
                CodeClicks(short_code=code, clicks=clicks)
                for code, clicks in report.top_clicks
            ],
            by_source=report.by_source,
            by_location=report.by_location,
        )
