"""
Unit tests for the shared/ utility modules and the analytics tag provider.

Covers:
- shared.validators      (validate_url, validate_custom_code, parse_validity_minutes)
- shared.generators      (generate_short_code, short_code_generator)
- shared.datetime_utils  (ensure_utc, truncate_to_millis, to_unix, to_iso)
- shared.clock           (SystemClock)
- shared.logging         (should_sample)
- infrastructure.analytics_tags (RandomTagProvider)
"""

from __future__ import annotations

import random
import string
from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.analytics_tags import (
    DEFAULT_LOCATIONS,
    DEFAULT_SOURCES,
    RandomTagProvider,
)
from shared import logging as shared_logging
from shared.clock import Clock, SystemClock
from shared.datetime_utils import ensure_utc, to_iso, to_unix, truncate_to_millis
from shared.generators import CODE_ALPHABET, generate_short_code, short_code_generator
from shared.validators import parse_validity_minutes, validate_custom_code, validate_url


# ---------------------------------------------------------------------------
# shared.validators — validate_url
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com", True),
        ("https://example.com/foo/bar?q=1", True),
        ("http://example.com/a", True),
        ("http://localhost:8000/path", True),
        ("ftp://example.com", False),
        ("mailto:someone@example.com", False),
        ("example.com", False),
        ("not-a-url", False),
        ("http://[::1/path", False),
        ("https://[2001:db8::1", False),
        ("", False),
        (None, False),
        (42, False),
    ],
    ids=[
        "https",
        "with_path",
        "http",
        "localhost",
        "ftp",
        "mailto",
        "no_scheme",
        "plain_text",
        "unbalanced_ipv6_bracket",
        "unclosed_ipv6_host",
        "empty",
        "none",
        "not_a_string",
    ],
)
def test_validate_url(url, expected):
    assert validate_url(url) is expected


# ---------------------------------------------------------------------------
# shared.validators — validate_custom_code
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "code, expected",
    [
        ("MyAlias123", True),
        ("my_alias", True),
        ("my-alias", True),
        ("a", True),
        ("", False),  # custom codes must be non-empty
        ("my alias", False),
        ("alias!", False),
        ("ünï", False),
        (None, False),
    ],
    ids=[
        "alphanumeric",
        "underscore",
        "hyphen",
        "single_char",
        "empty",
        "space",
        "exclamation",
        "non_ascii",
        "none",
    ],
)
def test_validate_custom_code(code, expected):
    assert validate_custom_code(code) is expected


# ---------------------------------------------------------------------------
# shared.validators — parse_validity_minutes
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1),
        (1440, 1440),
        ("30", 30),
        (0, None),
        (-3, None),
        (True, None),
        (2.0, None),
        ("030", None),
        ("3.0", None),
        (" 30", None),
        ("30\n", None),
        ("\u00b2", None),
        ("\u0663\u0660", None),
        ("-5", None),
        ("", None),
        (None, None),
    ],
    ids=[
        "one",
        "day",
        "string",
        "zero",
        "negative",
        "bool",
        "float",
        "leading_zero",
        "decimal_string",
        "padded",
        "trailing_newline",
        "superscript_digit",
        "arabic_indic_digits",
        "negative_string",
        "empty",
        "none",
    ],
)
def test_parse_validity_minutes(value, expected):
    assert parse_validity_minutes(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(60, 60), ("60", 60), (61, None), ("61", None), (10**10, None)],
    ids=["at_limit", "string_at_limit", "over_limit", "string_over_limit", "huge"],
)
def test_parse_validity_minutes_upper_bound(value, expected):
    assert parse_validity_minutes(value, max_minutes=60) == expected


# ---------------------------------------------------------------------------
# shared.generators
# ---------------------------------------------------------------------------


_ALPHANUM = set(string.ascii_letters + string.digits)


class TestGenerateShortCode:
    def test_length_is_6(self):
        assert len(generate_short_code()) == 6

    @pytest.mark.parametrize("length", [1, 8, 12])
    def test_custom_length(self, length):
        assert len(generate_short_code(length)) == length

    def test_only_alphanumeric(self):
        assert set(generate_short_code()).issubset(_ALPHANUM)

    def test_alphabet_has_62_symbols(self):
        assert len(set(CODE_ALPHABET)) == 62

    def test_produces_variety(self):
        assert len({generate_short_code() for _ in range(20)}) > 1

    def test_bound_generator(self):
        generate = short_code_generator(9)
        assert len(generate()) == 9


# ---------------------------------------------------------------------------
# shared.datetime_utils
# ---------------------------------------------------------------------------


class TestDatetimeUtils:
    def test_ensure_utc_naive(self):
        dt = ensure_utc(datetime(2026, 1, 1, 12, 0))
        assert dt.tzinfo == timezone.utc

    def test_ensure_utc_converts_offset(self):
        plus_two = timezone(timedelta(hours=2))
        dt = ensure_utc(datetime(2026, 1, 1, 14, 0, tzinfo=plus_two))
        assert dt == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert dt.utcoffset() == timedelta(0)

    def test_truncate_to_millis(self):
        dt = datetime(2026, 1, 1, 0, 0, 0, 999999, tzinfo=timezone.utc)
        assert truncate_to_millis(dt).microsecond == 999000

    def test_to_unix(self):
        assert to_unix(datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc)) == 60
        assert to_unix(None) is None

    def test_to_iso(self):
        dt = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert to_iso(dt) == "2026-01-01T12:00:00Z"
        assert to_iso(None) is None


# ---------------------------------------------------------------------------
# shared.clock
# ---------------------------------------------------------------------------


def test_system_clock_is_utc_aware():
    clock = SystemClock()
    assert isinstance(clock, Clock)
    assert clock.now().utcoffset() == timedelta(0)


# ---------------------------------------------------------------------------
# shared.logging — should_sample
# ---------------------------------------------------------------------------


class TestShouldSample:
    def test_unconfigured_event_always_logged(self):
        assert shared_logging.should_sample("link_created") is True

    def test_zero_rate_never_logged(self, monkeypatch):
        monkeypatch.setitem(shared_logging.SAMPLING_RATES, "url_redirect", 0.0)
        assert shared_logging.should_sample("url_redirect") is False

    def test_full_rate_always_logged(self, monkeypatch):
        monkeypatch.setitem(shared_logging.SAMPLING_RATES, "url_redirect", 1.0)
        assert shared_logging.should_sample("url_redirect") is True

    def test_partial_rate_uses_random(self, monkeypatch, mocker):
        monkeypatch.setitem(shared_logging.SAMPLING_RATES, "stats_query", 0.5)
        mocker.patch("shared.logging.random.random", return_value=0.4)
        assert shared_logging.should_sample("stats_query") is True
        mocker.patch("shared.logging.random.random", return_value=0.6)
        assert shared_logging.should_sample("stats_query") is False


# ---------------------------------------------------------------------------
# infrastructure.analytics_tags
# ---------------------------------------------------------------------------


class TestRandomTagProvider:
    def test_draws_from_default_lists(self):
        provider = RandomTagProvider(rng=random.Random(7))
        for _ in range(50):
            tag = provider.tag()
            assert tag.source in DEFAULT_SOURCES
            assert tag.location in DEFAULT_LOCATIONS

    def test_seeded_rng_is_deterministic(self):
        first_provider = RandomTagProvider(rng=random.Random(3))
        second_provider = RandomTagProvider(rng=random.Random(3))
        first = [first_provider.tag() for _ in range(5)]
        second = [second_provider.tag() for _ in range(5)]
        assert first == second

    def test_custom_lists(self):
        provider = RandomTagProvider(sources=["Email"], locations=["Oslo, NO"])
        tag = provider.tag()
        assert (tag.source, tag.location) == ("Email", "Oslo, NO")

    @pytest.mark.parametrize(
        "sources, locations", [([], ["x"]), (["x"], [])], ids=["no_sources", "no_locations"]
    )
    def test_empty_lists_rejected(self, sources, locations):
        with pytest.raises(ValueError):
            RandomTagProvider(sources=sources, locations=locations)
