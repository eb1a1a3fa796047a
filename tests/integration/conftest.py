"""
Integration test configuration.

Builds the real FastAPI app over the in-memory store, with the manual clock
and a fixed analytics tag so redirects are deterministic.
"""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import AppSettings, LoggingSettings
from schemas.models.link import AnalyticsTag


class FixedTagProvider:
    def __init__(self, source="Direct", location="London, UK"):
        self._tag = AnalyticsTag(source=source, location=location)

    def tag(self):
        return self._tag


@pytest.fixture
def settings():
    return AppSettings(
        app_url="https://sho.rt",
        logging=LoggingSettings(sample_rate_redirect=1.0, sample_rate_stats=1.0),
    )


@pytest.fixture
def app(settings, clock):
    return create_app(settings, clock=clock, tag_provider=FixedTagProvider())


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
