"""
Unit test configuration.

Wires the core components over an in-memory store and the manual clock.
"""

import pytest

from infrastructure.storage.memory import InMemoryLinkStore
from schemas.models.link import AnalyticsTag
from services.click_recorder import ClickRecorder
from services.link_registry import LinkRegistry
from services.redirect_resolver import RedirectResolver


@pytest.fixture
def store():
    return InMemoryLinkStore()


@pytest.fixture
def registry(store, clock):
    return LinkRegistry(store, clock=clock)


@pytest.fixture
def recorder(store, clock):
    return ClickRecorder(store, clock)


@pytest.fixture
def resolver(registry, recorder):
    return RedirectResolver(registry, recorder)


@pytest.fixture
def tag():
    return AnalyticsTag(source="Google", location="Berlin, DE")
