"""
Response DTOs for link endpoints.

LinkResponse     — POST /api/v1/shorten (201), GET /api/v1/links/{code_or_id}
LinkListResponse — GET /api/v1/links (200)
ResolveResponse  — POST /api/v1/resolve/{code} (200)

Timestamps are ISO 8601 UTC strings ending in ``Z``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.link import ClickEvent, Link
from shared.datetime_utils import to_iso


class ClickEventResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    timestamp: str
    source: str
    location: str

    @classmethod
    def from_click(cls, click: ClickEvent) -> "ClickEventResponse":
        return cls(
            id=str(click.id),
            timestamp=to_iso(click.timestamp),
            source=click.source,
            location=click.location,
        )


class LinkResponse(BaseModel):
    """A link as shown to API consumers, with derived expiry state.

    ``clicks`` is omitted from list responses to keep them small.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    short_code: str
    short_url: str
    original_url: str
    is_custom: bool
    created_at: str
    expires_at: str
    validity_minutes: int
    click_count: int
    is_active: bool
    clicks: Optional[list[ClickEventResponse]] = None

    @classmethod
    def from_link(
        cls,
        link: Link,
        *,
        base_url: str,
        now: datetime,
        include_clicks: bool = False,
    ) -> "LinkResponse":
        return cls(
            id=str(link.id),
            short_code=link.short_code,
            short_url=f"{base_url}/{link.short_code}",
            original_url=link.original_url,
            is_custom=link.is_custom,
            created_at=to_iso(link.created_at),
            expires_at=to_iso(link.expires_at),
            validity_minutes=link.validity_minutes,
            click_count=link.click_count,
            is_active=link.is_active(now),
            clicks=(
                [ClickEventResponse.from_click(c) for c in link.clicks]
                if include_clicks
                else None
            ),
        )


class LinkListResponse(BaseModel):
    """Response body for GET /api/v1/links, most recent first."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[LinkResponse]
    total: int
    active: int
    capacity: int


class ResolveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_url: str
