"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo import MongoClient

from config import AppSettings
from errors import register_error_handlers
from infrastructure.analytics_tags import AnalyticsTagProvider, RandomTagProvider
from infrastructure.storage.memory import InMemoryLinkStore
from infrastructure.storage.mongo import MongoLinkStore
from routes.health_routes import router as health_router
from routes.link_routes import router as link_router
from routes.redirect_routes import router as redirect_router
from routes.stats_routes import router as stats_router
from services.click_recorder import ClickRecorder
from services.link_registry import LinkRegistry
from services.redirect_resolver import RedirectResolver
from shared.clock import Clock, SystemClock
from shared.generators import short_code_generator
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    clock: Optional[Clock] = None,
    tag_provider: Optional[AnalyticsTagProvider] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()
    if clock is None:
        clock = SystemClock()
    if tag_provider is None:
        tag_provider = RandomTagProvider()

    setup_logging(settings.logging)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        mongo_client: Optional[MongoClient] = None
        if settings.storage.storage_backend == "mongo":
            mongo_client = MongoClient(settings.storage.mongodb_uri)
            collection = mongo_client[settings.storage.db_name][
                settings.storage.links_collection
            ]
            store = MongoLinkStore(collection)
            store.ensure_indexes()
        else:
            store = InMemoryLinkStore()

        registry = LinkRegistry(
            store,
            clock=clock,
            code_generator=short_code_generator(settings.registry.code_length),
            max_active_links=settings.registry.max_active_links,
            code_max_attempts=settings.registry.code_max_attempts,
            max_validity_minutes=settings.registry.max_validity_minutes,
            reserved_codes=settings.registry.reserved_codes,
        )
        app.state.settings = settings
        app.state.registry = registry
        app.state.resolver = RedirectResolver(registry, ClickRecorder(store, clock))
        app.state.tag_provider = tag_provider

        log.info(
            "app_started",
            storage_backend=settings.storage.storage_backend,
            max_active_links=settings.registry.max_active_links,
        )

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        if mongo_client is not None:
            mongo_client.close()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(link_router)
    app.include_router(stats_router)
    # catch-all /{code} route goes last
    app.include_router(redirect_router)

    return app
