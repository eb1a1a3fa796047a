"""
Shared test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during tests, and provides a manually advanced clock so expiry can be tested
without sleeping.
"""

from datetime import datetime, timedelta, timezone

import pytest


class ManualClock:
    """Clock that only moves when a test calls advance()."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture
def clock():
    return ManualClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))
