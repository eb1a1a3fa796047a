"""
Link management endpoints.

POST   /api/v1/shorten              — create a link (201)
GET    /api/v1/links                — list links, most recent first
GET    /api/v1/links/{code_or_id}   — one link with its click history
DELETE /api/v1/links/{link_id}      — delete a link
POST   /api/v1/resolve/{code}       — resolve a code and record a click

Handlers are plain ``def`` functions: the registry is synchronous and guards
itself with a threading lock, so FastAPI runs them in its worker threadpool.
Typed AppErrors raised by the core are rendered by the global error handler.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from config import AppSettings
from dependencies import get_registry, get_resolver, get_settings, get_tag_provider
from infrastructure.analytics_tags import AnalyticsTagProvider
from schemas.dto.requests.link import CreateLinkRequest, ResolveRequest
from schemas.dto.responses.common import MessageResponse
from schemas.dto.responses.link import LinkListResponse, LinkResponse, ResolveResponse
from services.link_registry import LinkRegistry
from services.redirect_resolver import RedirectResolver

router = APIRouter(prefix="/api/v1", tags=["links"])


@router.post("/shorten", status_code=201, response_model=LinkResponse)
def shorten(
    body: CreateLinkRequest,
    registry: LinkRegistry = Depends(get_registry),
    settings: AppSettings = Depends(get_settings),
) -> LinkResponse:
    validity_minutes = body.validity_minutes
    if validity_minutes is None:
        validity_minutes = settings.registry.default_validity_minutes

    link = registry.create(
        body.long_url,
        validity_minutes=validity_minutes,
        custom_code=body.alias,
    )
    return LinkResponse.from_link(link, base_url=settings.app_url, now=registry.now())


@router.get(
    "/links", response_model=LinkListResponse, response_model_exclude_none=True
)
def list_links(
    registry: LinkRegistry = Depends(get_registry),
    settings: AppSettings = Depends(get_settings),
) -> LinkListResponse:
    links = registry.list()
    now = registry.now()
    items = [
        LinkResponse.from_link(link, base_url=settings.app_url, now=now)
        for link in links
    ]
    return LinkListResponse(
        items=items,
        total=len(items),
        active=sum(1 for item in items if item.is_active),
        capacity=registry.max_active_links,
    )


@router.get("/links/{code_or_id}", response_model=LinkResponse)
def get_link(
    code_or_id: str,
    registry: LinkRegistry = Depends(get_registry),
    settings: AppSettings = Depends(get_settings),
) -> LinkResponse:
    link = registry.get(code_or_id)
    return LinkResponse.from_link(
        link, base_url=settings.app_url, now=registry.now(), include_clicks=True
    )


@router.delete("/links/{link_id}", response_model=MessageResponse)
def delete_link(
    link_id: str,
    registry: LinkRegistry = Depends(get_registry),
) -> MessageResponse:
    registry.delete(link_id)
    return MessageResponse(success=True, message="link deleted")


@router.post("/resolve/{code}", response_model=ResolveResponse)
def resolve_code(
    code: str,
    body: Optional[ResolveRequest] = Body(default=None),
    resolver: RedirectResolver = Depends(get_resolver),
    tag_provider: AnalyticsTagProvider = Depends(get_tag_provider),
) -> ResolveResponse:
    tag = body.to_tag() if body is not None else None
    if tag is None:
        tag = tag_provider.tag()
    return ResolveResponse(original_url=resolver.resolve(code, tag))
