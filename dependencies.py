"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. They read the objects create_app() stored on
app.state during startup.
"""

from __future__ import annotations

from fastapi import Request

from config import AppSettings
from infrastructure.analytics_tags import AnalyticsTagProvider
from services.link_registry import LinkRegistry
from services.redirect_resolver import RedirectResolver


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_registry(request: Request) -> LinkRegistry:
    return request.app.state.registry


def get_resolver(request: Request) -> RedirectResolver:
    return request.app.state.resolver


def get_tag_provider(request: Request) -> AnalyticsTagProvider:
    """Return the analytics collaborator that tags clicks without an explicit tag."""
    return request.app.state.tag_provider
