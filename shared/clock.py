"""Wall-clock abstraction.

Expiry is a pure function of "now", so every component reads time through an
injected Clock. Production uses SystemClock; tests substitute a manual clock.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)
