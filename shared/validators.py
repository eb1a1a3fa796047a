"""
Input validators — framework-agnostic, pure functions.

All validators are stateless and never raise; the registry decides which
typed error a failed check maps to.
"""

from __future__ import annotations

import re
from typing import Any, Optional
from urllib.parse import urlsplit

import validators as _validators

ALLOWED_SCHEMES = ("http", "https")

_CODE_RE = re.compile(r"[a-zA-Z0-9_-]+")
_MINUTES_RE = re.compile(r"[1-9][0-9]*")


def validate_url(url: Any) -> bool:
    """Return True if *url* is a non-empty, absolute HTTP/S URL.

    Format validation is delegated to the ``validators`` package with
    ``simple_host`` enabled so hosts such as ``localhost`` are accepted;
    the scheme is then restricted to http and https.
    """
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        scheme = urlsplit(url).scheme
    except ValueError:
        # e.g. an unbalanced IPv6 bracket in the netloc
        return False
    if scheme.lower() not in ALLOWED_SCHEMES:
        return False
    return bool(_validators.url(url, simple_host=True))


def validate_custom_code(code: Any) -> bool:
    """Return True if *code* is non-empty and contains only ``[a-zA-Z0-9_-]``."""
    return isinstance(code, str) and bool(_CODE_RE.fullmatch(code))


def parse_validity_minutes(
    value: Any, max_minutes: Optional[int] = None
) -> Optional[int]:
    """Return *value* as a positive ``int``, or ``None`` if it is not one.

    Accepts:
    - ``int`` greater than zero (``bool`` is rejected)
    - ``str`` holding the canonical ASCII decimal form of a positive integer,
      so ``"30"`` passes while ``"030"``, ``" 30"``, ``"3.0"`` and ``"²"`` do not

    Values above *max_minutes*, when given, are rejected as well.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _MINUTES_RE.fullmatch(value):
        number = int(value)
    else:
        return None
    if number <= 0:
        return None
    if max_minutes is not None and number > max_minutes:
        return None
    return number
