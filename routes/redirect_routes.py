"""
Short URL redirect.

GET /{code} — 302 to the original URL, recording one click tagged by the
configured analytics tag provider. Unknown codes give 404, expired ones 410.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from dependencies import get_resolver, get_tag_provider
from infrastructure.analytics_tags import AnalyticsTagProvider
from services.redirect_resolver import RedirectResolver

router = APIRouter(tags=["redirect"])


@router.get("/{code}", include_in_schema=False)
def redirect_code(
    code: str,
    resolver: RedirectResolver = Depends(get_resolver),
    tag_provider: AnalyticsTagProvider = Depends(get_tag_provider),
) -> RedirectResponse:
    original_url = resolver.resolve(code, tag_provider.tag())
    return RedirectResponse(original_url, status_code=302)
