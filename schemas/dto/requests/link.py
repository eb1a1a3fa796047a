"""
Request DTOs for link creation and resolution endpoints.

Field checks that carry typed errors (URL shape, validity period, custom code
format) are left to LinkRegistry so their order stays deterministic; the DTOs
only normalise what the form sends.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from schemas.models.link import AnalyticsTag


class CreateLinkRequest(BaseModel):
    """Request body for POST /api/v1/shorten.

    Accepts ``url`` as an alias for ``long_url`` and ``custom_code`` as an
    alias for ``alias``. A blank alias means "generate one". A missing
    ``validity_minutes`` falls back to the configured default.
    """

    model_config = ConfigDict(populate_by_name=True)

    long_url: str = Field(validation_alias=AliasChoices("long_url", "url"))
    alias: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("alias", "custom_code")
    )
    # int or canonical decimal string; LinkRegistry validates
    validity_minutes: Optional[Any] = None

    @field_validator("alias", mode="before")
    @classmethod
    def _blank_alias_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ResolveRequest(BaseModel):
    """Optional body for POST /api/v1/resolve/{code}.

    When both ``source`` and ``location`` are given they are recorded as the
    click's analytics tag; otherwise the configured tag provider supplies one.
    """

    model_config = ConfigDict(populate_by_name=True)

    source: Optional[str] = None
    location: Optional[str] = None

    def to_tag(self) -> Optional[AnalyticsTag]:
        if self.source is None or self.location is None:
            return None
        return AnalyticsTag(source=self.source, location=self.location)
