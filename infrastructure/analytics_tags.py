"""Analytics tag providers.

The redirect path needs a (source, location) tag for every click. Real
referrer and geo-IP inference is out of scope; RandomTagProvider is the
placeholder that draws both values from fixed lists.
"""

import random
from typing import Optional, Protocol, Sequence

from schemas.models.link import AnalyticsTag

DEFAULT_SOURCES = ("Direct", "Google", "Facebook", "Twitter", "LinkedIn", "Reddit")
DEFAULT_LOCATIONS = (
    "New York, US",
    "London, UK",
    "Tokyo, JP",
    "Sydney, AU",
    "Toronto, CA",
    "Berlin, DE",
)


class AnalyticsTagProvider(Protocol):
    def tag(self) -> AnalyticsTag: ...


class RandomTagProvider:
    def __init__(
        self,
        sources: Sequence[str] = DEFAULT_SOURCES,
        locations: Sequence[str] = DEFAULT_LOCATIONS,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not sources or not locations:
            raise ValueError("sources and locations must be non-empty")
        self._sources = tuple(sources)
        self._locations = tuple(locations)
        self._rng = rng or random.Random()

    def tag(self) -> AnalyticsTag:
        return AnalyticsTag(
            source=self._rng.choice(self._sources),
            location=self._rng.choice(self._locations),
        )
