"""
Link and click models.

Maps to the `links` MongoDB collection. Click events are embedded in their
link document so a single update can append a click and bump the counter:

  {
    _id, short_code, original_url, is_custom,
    created_at, expires_at, validity_minutes,
    click_count, clicks: [{_id, timestamp, source, location}, ...]
  }

A link is active until `expires_at`; there is no stored status. Expiry is
always evaluated against a caller-supplied "now".
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from schemas.models.base import MongoBaseModel
from shared.datetime_utils import ensure_utc


class AnalyticsTag(BaseModel):
    """Opaque (source, location) pair supplied by the analytics collaborator."""

    source: str
    location: str


class ClickEvent(MongoBaseModel):
    """A single recorded visit through a link's short code."""

    timestamp: datetime
    source: str
    location: str

    @field_validator("timestamp", mode="after")
    @classmethod
    def _utc_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class Link(MongoBaseModel):
    """Document model for the `links` collection."""

    short_code: str
    original_url: str
    is_custom: bool = False
    created_at: datetime
    expires_at: datetime
    validity_minutes: int = Field(gt=0)
    click_count: int = Field(default=0, ge=0)
    clicks: list[ClickEvent] = Field(default_factory=list)

    @field_validator("created_at", "expires_at", mode="after")
    @classmethod
    def _utc_datetimes(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_active(self, now: datetime) -> bool:
        return not self.is_expired(now)
