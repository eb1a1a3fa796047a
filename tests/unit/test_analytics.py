"""Unit tests for services.analytics — pure functions over link snapshots."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from schemas.models.link import ClickEvent, Link
from services.analytics import (
    AnalyticsReport,
    LinkTotals,
    build_report,
    by_location,
    by_source,
    top_clicks,
    totals,
)

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _link(code, *, clicks=(), minutes=30, created=NOW):
    events = [
        ClickEvent(timestamp=created, source=source, location=location)
        for source, location in clicks
    ]
    return Link(
        short_code=code,
        original_url=f"https://example.com/{code}",
        created_at=created,
        expires_at=created + timedelta(minutes=minutes),
        validity_minutes=minutes,
        click_count=len(events),
        clicks=events,
    )


@pytest.fixture
def links():
    # most recent first, as LinkRegistry.list() returns them
    return [
        _link("ccc333", clicks=[("Google", "Tokyo, JP")]),
        _link(
            "bbb222",
            clicks=[
                ("Direct", "London, UK"),
                ("Google", "London, UK"),
                ("Direct", "Berlin, DE"),
            ],
        ),
        _link("aaa111", minutes=5, created=NOW - timedelta(minutes=10)),
    ]


class TestTotals:
    def test_totals(self, links):
        assert totals(links, NOW) == LinkTotals(
            link_count=3, total_clicks=4, active_count=2
        )

    def test_empty(self):
        assert totals([], NOW) == LinkTotals(link_count=0, total_clicks=0, active_count=0)

    def test_active_count_moves_with_now(self, links):
        assert totals(links, NOW + timedelta(minutes=30)).active_count == 0

    def test_defaults_to_current_time(self):
        far_future = datetime(2999, 1, 1, tzinfo=timezone.utc)
        link = _link("zzz999", created=far_future)
        assert totals([link]).active_count == 1


class TestTopClicks:
    def test_listing_order_not_click_order(self, links):
        assert top_clicks(links, 5) == [("ccc333", 1), ("bbb222", 3), ("aaa111", 0)]

    def test_truncates_to_limit(self, links):
        assert top_clicks(links, 2) == [("ccc333", 1), ("bbb222", 3)]

    def test_at_most_limit_entries(self):
        many = [_link(f"code{i:02d}") for i in range(12)]
        result = top_clicks(many, 5)
        assert len(result) == 5
        assert [code for code, _ in result] == [f"code{i:02d}" for i in range(5)]

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, links, limit):
        assert top_clicks(links, limit) == []


class TestBreakdowns:
    def test_by_source(self, links):
        assert by_source(links) == {"Google": 2, "Direct": 2}

    def test_by_location(self, links):
        assert by_location(links) == {"Tokyo, JP": 1, "London, UK": 2, "Berlin, DE": 1}

    def test_breakdowns_sum_to_total_clicks(self, links):
        total = totals(links, NOW).total_clicks
        assert sum(by_source(links).values()) == total
        assert sum(by_location(links).values()) == total

    def test_empty(self):
        assert by_source([]) == {}
        assert by_location([]) == {}


class TestPurity:
    def test_repeat_calls_identical_and_input_untouched(self, links):
        before = [link.model_copy(deep=True) for link in links]
        first = build_report(links, NOW)
        second = build_report(links, NOW)
        assert first == second
        assert links == before

    def test_build_report(self, links):
        report = build_report(links, NOW, limit=1)
        assert isinstance(report, AnalyticsReport)
        assert report.totals.total_clicks == 4
        assert report.top_clicks == [("ccc333", 1)]
        assert report.by_source == {"Google": 2, "Direct": 2}


def test_over_registry_snapshot(registry, resolver, tag, clock):
    first = registry.create("https://example.com/1", validity_minutes=5)
    second = registry.create("https://example.com/2", validity_minutes=60)
    resolver.resolve(first.short_code, tag)
    resolver.resolve(second.short_code, tag)
    resolver.resolve(second.short_code, tag)
    clock.advance(minutes=10)

    report = build_report(registry.list(), clock.now())
    assert report.totals == LinkTotals(link_count=2, total_clicks=3, active_count=1)
    assert report.top_clicks == [(second.short_code, 2), (first.short_code, 1)]
    assert report.by_source == {"Google": 3}
